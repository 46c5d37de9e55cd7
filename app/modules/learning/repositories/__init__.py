# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/repositories/__init__.py
"""

from .enrollment_repository import EnrollmentRepository

__all__ = ["EnrollmentRepository"]
