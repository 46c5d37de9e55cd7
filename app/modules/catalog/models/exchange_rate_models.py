# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/models/exchange_rate_models.py

Tipos de cambio desde la moneda base (USD).

Autor: Seencel
Fecha: 2026-09-17
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow


class ExchangeRate(Base):
    __tablename__ = "exchange_rates"
    __table_args__ = (
        Index("ix_exchange_rates_pair_active", "from_currency", "to_currency", "is_active"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    from_currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    to_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


__all__ = ["ExchangeRate"]

# Fin del archivo backend/app/modules/catalog/models/exchange_rate_models.py
