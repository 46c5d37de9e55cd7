# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/product_type_enum.py

Tipo de producto comprado (define la acción de fulfillment).
Sincronizado con el tipo ENUM de PostgreSQL: product_type_enum.

Autor: Seencel
Fecha: 2026-09-16
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class ProductType(StrEnum):
    """Tipo de producto comprado (define la acción de fulfillment)."""

    COURSE = "course"
    SUBSCRIPTION = "subscription"

    __pg_enum_name__ = "product_type_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["ProductType"]

# Fin del archivo backend/app/modules/payments/enums/product_type_enum.py
