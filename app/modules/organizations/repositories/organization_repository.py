# -*- coding: utf-8 -*-
"""
backend/app/modules/organizations/repositories/organization_repository.py

Repositorios de organizaciones y suscripciones.

Autor: Seencel
Fecha: 2026-09-20
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.organizations.models import (
    Organization,
    OrganizationSubscription,
    SubscriptionStatus,
)


class OrganizationRepository(BaseRepository[Organization]):
    def __init__(self) -> None:
        super().__init__(Organization)


class SubscriptionRepository(BaseRepository[OrganizationSubscription]):
    def __init__(self) -> None:
        super().__init__(OrganizationSubscription)

    async def get_active(
        self,
        session: AsyncSession,
        organization_id: str,
    ) -> Optional[OrganizationSubscription]:
        stmt = select(OrganizationSubscription).where(
            OrganizationSubscription.organization_id == organization_id,
            OrganizationSubscription.status == SubscriptionStatus.ACTIVE,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def expire_active(
        self,
        session: AsyncSession,
        organization_id: str,
        *,
        now: datetime,
    ) -> int:
        """Marca como expired todas las suscripciones activas de la organización."""
        stmt = (
            update(OrganizationSubscription)
            .where(
                OrganizationSubscription.organization_id == organization_id,
                OrganizationSubscription.status == SubscriptionStatus.ACTIVE,
            )
            .values(status=SubscriptionStatus.EXPIRED, cancelled_at=now)
        )
        result = await session.execute(stmt)
        return result.rowcount or 0


# Fin del archivo backend/app/modules/organizations/repositories/organization_repository.py
