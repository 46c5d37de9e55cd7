# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_db_enum: helper para mapear StrEnum de Python a ENUM nombrado
- JSONType: JSON genérico con variante JSONB en PostgreSQL
- new_uuid / utcnow / as_utc: defaults y normalización de fechas

Autor: Seencel
Fecha: 2026-09-15
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Type

from sqlalchemy import JSON, MetaData
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# Payloads crudos de proveedores: JSONB en Postgres, JSON en SQLite (tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Normaliza a UTC aware (SQLite devuelve datetimes naive)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_db_enum(enum_cls: Type[Enum], name: str | None = None) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy persistiendo el *valor* del enum.

    Uso típico:

        class Payment(Base):
            status: Mapped[PaymentStatus] = mapped_column(
                as_db_enum(PaymentStatus),
                nullable=False,
            )

    - Si no se pasa `name`, usa `__pg_enum_name__` del enum o el nombre
      de la clase en minúsculas.
    - En PostgreSQL se emite como tipo ENUM nombrado; en SQLite como VARCHAR.
    """
    enum_name = name or getattr(enum_cls, "__pg_enum_name__", enum_cls.__name__.lower())

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return SAEnum(
        enum_cls,
        name=enum_name,
        values_callable=_values,
        validate_strings=True,
        create_constraint=False,
    )


__all__ = ["Base", "NAMING_CONVENTION", "JSONType", "as_db_enum", "new_uuid", "utcnow", "as_utc"]

# Fin del archivo backend/app/shared/database/base.py
