# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/repositories/membership_repository.py

Consulta de membresías activas para las verificaciones de rol.

Autor: Seencel
Fecha: 2026-09-20
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.organizations.models import OrganizationMember


class MembershipRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_active_membership(
        self,
        organization_id: str,
        user_id: str,
    ) -> Optional[OrganizationMember]:
        stmt = select(OrganizationMember).where(
            OrganizationMember.organization_id == organization_id,
            OrganizationMember.user_id == user_id,
            OrganizationMember.is_active.is_(True),
        )
        result = await self._db.execute(stmt)
        return result.scalars().first()


__all__ = ["MembershipRepository"]

# Fin del archivo backend/app/modules/auth/repositories/membership_repository.py
