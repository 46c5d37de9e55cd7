# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/repositories/catalog_repository.py

Repositorios del catálogo: cursos, planes, tipos de cambio y sesiones
de checkout legacy.

Autor: Seencel
Fecha: 2026-09-20
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.catalog.models import (
    CheckoutSession,
    Course,
    CoursePrice,
    ExchangeRate,
    Plan,
)


class CourseRepository(BaseRepository[Course]):
    def __init__(self) -> None:
        super().__init__(Course)

    async def get_active(self, session: AsyncSession, id_or_slug: str) -> Optional[Course]:
        """Busca un curso activo por id o por slug."""
        stmt = select(Course).where(
            or_(Course.id == id_or_slug, Course.slug == id_or_slug),
            Course.is_active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalars().first()


class PlanRepository(BaseRepository[Plan]):
    def __init__(self) -> None:
        super().__init__(Plan)

    async def get_active(self, session: AsyncSession, id_or_slug: str) -> Optional[Plan]:
        stmt = select(Plan).where(
            or_(Plan.id == id_or_slug, Plan.slug == id_or_slug),
            Plan.is_active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalars().first()


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    def __init__(self) -> None:
        super().__init__(ExchangeRate)

    async def get_active_rate(
        self,
        session: AsyncSession,
        from_currency: str,
        to_currency: str,
    ) -> Optional[Decimal]:
        """Tipo de cambio activo más reciente para el par, o None."""
        stmt = (
            select(ExchangeRate.rate)
            .where(
                ExchangeRate.from_currency == from_currency.upper(),
                ExchangeRate.to_currency == to_currency.upper(),
                ExchangeRate.is_active.is_(True),
            )
            .order_by(ExchangeRate.updated_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class CheckoutSessionRepository(BaseRepository[CheckoutSession]):
    def __init__(self) -> None:
        super().__init__(CheckoutSession)

    async def get_course_id(self, session: AsyncSession, checkout_session_id: str) -> Optional[str]:
        """checkout_sessions → course_prices → course_id (None si no resuelve)."""
        stmt = (
            select(CoursePrice.course_id)
            .join(CheckoutSession, CheckoutSession.course_price_id == CoursePrice.id)
            .where(CheckoutSession.id == checkout_session_id)
        )
        result = await session.execute(stmt)
        return result.scalars().first()


__all__ = [
    "CourseRepository",
    "PlanRepository",
    "ExchangeRateRepository",
    "CheckoutSessionRepository",
]

# Fin del archivo backend/app/modules/catalog/repositories/catalog_repository.py
