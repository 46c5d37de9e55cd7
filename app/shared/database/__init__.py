# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Seencel
Fecha: 2026-09-15
"""

from __future__ import annotations

from .database import (
    get_engine,
    get_sessionmaker,
    get_async_session,
    session_scope,
    check_database_health,
    dispose_engine,
)
from .base import Base, NAMING_CONVENTION, JSONType, as_db_enum, new_uuid, utcnow, as_utc
from .repository import BaseRepository

__all__ = [
    "get_engine",
    "get_sessionmaker",
    "get_async_session",
    "session_scope",
    "check_database_health",
    "dispose_engine",
    "Base",
    "NAMING_CONVENTION",
    "JSONType",
    "as_db_enum",
    "new_uuid",
    "utcnow",
    "as_utc",
    "BaseRepository",
]

# Fin del archivo backend/app/shared/database/__init__.py
