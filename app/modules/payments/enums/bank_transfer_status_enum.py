# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/bank_transfer_status_enum.py

Estado de revisión de una transferencia bancaria.
Sincronizado con el tipo ENUM de PostgreSQL: bank_transfer_status_enum.

Autor: Seencel
Fecha: 2026-09-17
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class BankTransferStatus(StrEnum):
    """Estado de revisión de una transferencia bancaria."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    __pg_enum_name__ = "bank_transfer_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return _as_db_enum(cls, name=cls.__pg_enum_name__)


__all__ = ["BankTransferStatus"]

# Fin del archivo backend/app/modules/payments/enums/bank_transfer_status_enum.py
