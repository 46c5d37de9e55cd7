# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/models/__init__.py
"""

from .coupon_models import Coupon, CouponRedemption

__all__ = ["Coupon", "CouponRedemption"]
