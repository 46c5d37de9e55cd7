# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/billing_period_enum.py

Periodo de facturación de una suscripción de organización.
Sincronizado con el tipo ENUM de PostgreSQL: billing_period_enum.

Autor: Seencel
Fecha: 2026-09-17
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class BillingPeriod(StrEnum):
    """Periodo de facturación de una suscripción de organización."""

    MONTHLY = "monthly"
    ANNUAL = "annual"

    __pg_enum_name__ = "billing_period_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["BillingPeriod"]

# Fin del archivo backend/app/modules/payments/enums/billing_period_enum.py
