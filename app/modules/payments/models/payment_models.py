# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_models.py

Modelo ORM para la tabla payments.

`provider_payment_id` es la clave de idempotencia de la captura: el índice
único parcial (solo filas no nulas) es el árbitro final cuando dos entregas
del mismo evento pasan a la vez la verificación previa. Los pagos por
transferencia se crean sin id de proveedor.

Autor: Seencel
Fecha: 2026-09-19
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow
from app.modules.payments.enums import PaymentProvider, PaymentStatus, ProductType


class Payment(Base):
    """Pago registrado (MercadoPago / PayPal / transferencia / gratuito)."""

    __tablename__ = "payments"
    __table_args__ = (
        Index(
            "uq_payments_provider_payment_id",
            "provider_payment_id",
            unique=True,
            postgresql_where=text("provider_payment_id IS NOT NULL"),
            sqlite_where=text("provider_payment_id IS NOT NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    provider: Mapped[PaymentProvider] = mapped_column(PaymentProvider.as_db_enum(), nullable=False)

    provider_payment_id: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="ID de la captura/pago en el proveedor (NULL en transferencias aún no aprobadas).",
    )

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    organization_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    product_type: Mapped[ProductType] = mapped_column(ProductType.as_db_enum(), nullable=False)

    product_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        doc="courses.id o plans.id según product_type.",
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    status: Mapped[PaymentStatus] = mapped_column(PaymentStatus.as_db_enum(), nullable=False, index=True)

    coupon_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    coupon_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Momento en que el pago quedó completed.",
    )

    def __repr__(self) -> str:
        return (
            f"<Payment id={self.id} provider={self.provider} "
            f"provider_payment_id={self.provider_payment_id} status={self.status} "
            f"amount={self.amount} {self.currency}>"
        )


__all__ = ["Payment"]

# Fin del archivo backend/app/modules/payments/models/payment_models.py
