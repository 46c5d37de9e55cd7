# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/repositories/coupon_repository.py

Repositorio para coupons y coupon_redemptions.

Autor: Seencel
Fecha: 2026-09-20
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.coupons.models import Coupon, CouponRedemption


class CouponRepository(BaseRepository[Coupon]):
    def __init__(self) -> None:
        super().__init__(Coupon)

    async def get_by_code(self, session: AsyncSession, code: str) -> Optional[Coupon]:
        """Búsqueda case-insensitive por código."""
        normalized = (code or "").strip().upper()
        if not normalized:
            return None
        stmt = select(Coupon).where(func.upper(Coupon.code) == normalized)
        result = await session.execute(stmt)
        return result.scalars().first()


class CouponRedemptionRepository(BaseRepository[CouponRedemption]):
    def __init__(self) -> None:
        super().__init__(CouponRedemption)

    async def count_for_coupon(self, session: AsyncSession, coupon_id: str) -> int:
        stmt = select(func.count()).select_from(CouponRedemption).where(
            CouponRedemption.coupon_id == coupon_id
        )
        return int((await session.execute(stmt)).scalar_one())

    async def count_for_user(self, session: AsyncSession, coupon_id: str, user_id: str) -> int:
        stmt = select(func.count()).select_from(CouponRedemption).where(
            CouponRedemption.coupon_id == coupon_id,
            CouponRedemption.user_id == user_id,
        )
        return int((await session.execute(stmt)).scalar_one())


# Fin del archivo backend/app/modules/coupons/repositories/coupon_repository.py
