# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_repository.py

Repositorio para la tabla payments.

Responsabilidades:
- Búsqueda por provider_payment_id (verificación previa de idempotencia)

Autor: Seencel
Fecha: 2026-09-20
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.payment_models import Payment


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self) -> None:
        super().__init__(Payment)

    async def get_by_provider_payment_id(
        self,
        session: AsyncSession,
        provider_payment_id: str,
    ) -> Optional[Payment]:
        """Obtiene un payment por el id de captura/pago del proveedor."""
        stmt = select(Payment).where(Payment.provider_payment_id == provider_payment_id)
        result = await session.execute(stmt)
        return result.scalars().first()


__all__ = ["PaymentRepository"]

# Fin del archivo backend/app/modules/payments/repositories/payment_repository.py
