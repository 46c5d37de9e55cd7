# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/services/__init__.py
"""

from .coupon_validator import CouponApplication, CouponRejection, CouponValidator

__all__ = ["CouponApplication", "CouponRejection", "CouponValidator"]
