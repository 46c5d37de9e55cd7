# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_status_enum.py

Estado del pago: pending → completed, o terminal rejected.
Sincronizado con el tipo ENUM de PostgreSQL: payment_status_enum.

Autor: Seencel
Fecha: 2026-09-16
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class PaymentStatus(StrEnum):
    """Estado del pago: pending → completed, o terminal rejected."""

    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"

    __pg_enum_name__ = "payment_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["PaymentStatus"]

# Fin del archivo backend/app/modules/payments/enums/payment_status_enum.py
