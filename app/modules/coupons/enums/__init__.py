# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/enums/__init__.py

Autor: Seencel
Fecha: 2026-09-18
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class DiscountType(StrEnum):
    """Tipo de descuento: porcentaje del precio base o monto fijo."""

    PERCENT = "percent"
    FIXED = "fixed"

    __pg_enum_name__ = "coupon_discount_type_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["DiscountType"]
