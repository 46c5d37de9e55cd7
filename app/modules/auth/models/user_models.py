# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/models/user_models.py

Perfil público del usuario (tabla users).

La identidad de sesión (JWT `sub`) corresponde a `auth_id`; el resto del
sistema referencia siempre `users.id`.

Autor: Seencel
Fecha: 2026-09-17
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, new_uuid, utcnow


class User(Base):
    """Perfil de usuario vinculado a la identidad del proveedor de sesión."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    auth_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def first_name(self) -> Optional[str]:
        parts = (self.full_name or "").split()
        return parts[0] if parts else None

    @property
    def last_name(self) -> Optional[str]:
        parts = (self.full_name or "").split()
        return " ".join(parts[1:]) if len(parts) > 1 else None

    def __repr__(self) -> str:
        return f"<User id={self.id} auth_id={self.auth_id}>"


__all__ = ["User"]

# Fin del archivo backend/app/modules/auth/models/user_models.py
