# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_provider_enum.py

Proveedores/canales por los que se registra un pago.
Sincronizado con el tipo ENUM de PostgreSQL: payment_provider_enum.

Autor: Seencel
Fecha: 2026-09-16
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class PaymentProvider(StrEnum):
    """Proveedores/canales por los que se registra un pago."""

    MERCADOPAGO = "mercadopago"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    FREE = "free"

    __pg_enum_name__ = "payment_provider_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["PaymentProvider"]

# Fin del archivo backend/app/modules/payments/enums/payment_provider_enum.py
