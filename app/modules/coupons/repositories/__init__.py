# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/repositories/__init__.py
"""

from .coupon_repository import CouponRepository, CouponRedemptionRepository

__all__ = ["CouponRepository", "CouponRedemptionRepository"]
