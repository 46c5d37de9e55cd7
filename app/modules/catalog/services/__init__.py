# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/services/__init__.py
"""

from .products import CourseProduct, PlanProduct, ProductRef, CatalogService
from .pricing_resolver import PricingResolver, BASE_CURRENCY

__all__ = [
    "CourseProduct",
    "PlanProduct",
    "ProductRef",
    "CatalogService",
    "PricingResolver",
    "BASE_CURRENCY",
]
