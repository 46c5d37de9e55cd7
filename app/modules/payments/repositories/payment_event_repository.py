# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_event_repository.py

Repositorio de la bitácora payment_events (solo inserción y lectura).

Autor: Seencel
Fecha: 2026-09-20
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.payment_event_models import PaymentEvent


class PaymentEventRepository(BaseRepository[PaymentEvent]):
    def __init__(self) -> None:
        super().__init__(PaymentEvent)

    async def list_by_provider_payment_id(
        self,
        session: AsyncSession,
        provider_payment_id: str,
    ) -> Sequence[PaymentEvent]:
        stmt = (
            select(PaymentEvent)
            .where(PaymentEvent.provider_payment_id == provider_payment_id)
            .order_by(PaymentEvent.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


__all__ = ["PaymentEventRepository"]

# Fin del archivo backend/app/modules/payments/repositories/payment_event_repository.py
