# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/models/coupon_models.py

Modelos ORM de cupones (coupons) y redenciones (coupon_redemptions).

Reglas de elegibilidad configurables por fila:
- ventana de vigencia (starts_at / expires_at)
- alcance: todos los cursos o uno puntual (course_id)
- límite global (max_redemptions) y por usuario (per_user_limit)

Autor: Seencel
Fecha: 2026-09-18
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow
from app.modules.coupons.enums import DiscountType


class Coupon(Base):
    __tablename__ = "coupons"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    # Se guarda en mayúsculas; la búsqueda es case-insensitive
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    discount_type: Mapped[DiscountType] = mapped_column(DiscountType.as_db_enum(), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)
    applies_to_all: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    course_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=True
    )
    max_redemptions: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    per_user_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    starts_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Coupon code={self.code} type={self.discount_type} amount={self.amount}>"


class CouponRedemption(Base):
    """Uso efectivo de un cupón (se registra tras un pago nuevo o una inscripción gratuita)."""

    __tablename__ = "coupon_redemptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    coupon_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("coupons.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    course_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    payment_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("payments.id", ondelete="SET NULL"), nullable=True
    )
    original_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    final_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


__all__ = ["Coupon", "CouponRedemption"]

# Fin del archivo backend/app/modules/coupons/models/coupon_models.py
