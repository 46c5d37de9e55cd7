# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/models/checkout_session_models.py

Sesiones de checkout legacy. Hoy solo se consultan para recuperar el
curso de transferencias bancarias antiguas que no guardaron `course_id`.

Autor: Seencel
Fecha: 2026-09-18
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow


class CheckoutSession(Base):
    __tablename__ = "checkout_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    course_price_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("course_prices.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


__all__ = ["CheckoutSession"]

# Fin del archivo backend/app/modules/catalog/models/checkout_session_models.py
