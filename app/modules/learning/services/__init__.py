# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/services/__init__.py
"""

from .enrollment_service import EnrollmentService, DEFAULT_ACCESS_MONTHS

__all__ = ["EnrollmentService", "DEFAULT_ACCESS_MONTHS"]
