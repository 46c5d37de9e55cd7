# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/bank_transfer_models.py

Transferencias bancarias declaradas por el usuario (bank_transfer_payments).

Ciclo: pending (sin payment) → pending (payment + comprobante) →
approved / rejected por un administrador.

Autor: Seencel
Fecha: 2026-09-19
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow
from app.modules.payments.enums import BankTransferStatus


class BankTransferPayment(Base):
    __tablename__ = "bank_transfer_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    # Sesión de checkout de origen (registros legacy sin course_id)
    order_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    course_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    payment_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("payments.id", ondelete="SET NULL"), nullable=True
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    payer_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    payer_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0"))
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    status: Mapped[BankTransferStatus] = mapped_column(BankTransferStatus.as_db_enum(), nullable=False)
    receipt_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    reviewed_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<BankTransferPayment id={self.id} user={self.user_id} status={self.status}>"


__all__ = ["BankTransferPayment"]

# Fin del archivo backend/app/modules/payments/models/bank_transfer_models.py
