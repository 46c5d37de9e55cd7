# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/bank_transfer_repository.py

Repositorio para bank_transfer_payments.

Autor: Seencel
Fecha: 2026-09-20
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.bank_transfer_models import BankTransferPayment


class BankTransferRepository(BaseRepository[BankTransferPayment]):
    def __init__(self) -> None:
        super().__init__(BankTransferPayment)

    async def get_owned(
        self,
        session: AsyncSession,
        transfer_id: str,
        user_id: str,
    ) -> Optional[BankTransferPayment]:
        """Devuelve la transferencia solo si pertenece al usuario."""
        stmt = select(BankTransferPayment).where(
            BankTransferPayment.id == transfer_id,
            BankTransferPayment.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def attach_receipt(
        self,
        session: AsyncSession,
        transfer: BankTransferPayment,
        *,
        payment_id: str,
        receipt_url: str,
        course_id: str,
    ) -> BankTransferPayment:
        transfer.payment_id = payment_id
        transfer.receipt_url = receipt_url
        transfer.course_id = course_id
        await session.flush()
        return transfer


__all__ = ["BankTransferRepository"]

# Fin del archivo backend/app/modules/payments/repositories/bank_transfer_repository.py
