# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_event_models.py

Bitácora append-only de eventos de proveedores (payment_events).

Cada entrega (redirect o webhook) deja una fila con el payload crudo para
análisis forense, aunque resulte duplicada o sin metadata. Por eso no hay
restricción de unicidad sobre provider_event_id.

Autor: Seencel
Fecha: 2026-09-19
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType, new_uuid, utcnow
from app.modules.payments.enums import PaymentProvider


class PaymentEvent(Base):
    """Evento recibido de un proveedor (audit log)."""

    __tablename__ = "payment_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    provider: Mapped[PaymentProvider] = mapped_column(PaymentProvider.as_db_enum(), nullable=False)

    provider_event_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True, index=True)
    provider_event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    raw_payload: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    order_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    custom_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_hint: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    product_hint: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    provider_payment_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True, index=True)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return (
            f"<PaymentEvent id={self.id} provider={self.provider} "
            f"type={self.provider_event_type} payment={self.provider_payment_id}>"
        )


__all__ = ["PaymentEvent"]

# Fin del archivo backend/app/modules/payments/models/payment_event_models.py
