# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/repositories/user_repository.py

Repositorio de acceso a perfiles de usuario (tabla users).
Resuelve la identidad de sesión (auth_id) al id de perfil.

Autor: Seencel
Fecha: 2026-09-20
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.models.user_models import User


class UserRepository:
    """Repositorio de perfiles (User)."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._db.get(User, user_id)

    async def get_by_auth_id(self, auth_id: str) -> Optional[User]:
        """Devuelve el perfil asociado al `sub` del token, o None."""
        if not auth_id:
            return None
        stmt = select(User).where(User.auth_id == auth_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()


__all__ = ["UserRepository"]

# Fin del archivo backend/app/modules/auth/repositories/user_repository.py
