# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/repositories/__init__.py
"""

from .catalog_repository import (
    CourseRepository,
    PlanRepository,
    ExchangeRateRepository,
    CheckoutSessionRepository,
)

__all__ = [
    "CourseRepository",
    "PlanRepository",
    "ExchangeRateRepository",
    "CheckoutSessionRepository",
]
