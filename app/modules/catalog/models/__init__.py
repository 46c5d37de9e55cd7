# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/models/__init__.py
"""

from .course_models import Course, CoursePrice
from .plan_models import Plan
from .exchange_rate_models import ExchangeRate
from .checkout_session_models import CheckoutSession

__all__ = ["Course", "CoursePrice", "Plan", "ExchangeRate", "CheckoutSession"]
