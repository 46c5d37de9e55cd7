# -*- coding: utf-8 -*-
"""
backend/app/modules/learning/models/__init__.py
"""

from .enrollment_models import CourseEnrollment, EnrollmentStatus

__all__ = ["CourseEnrollment", "EnrollmentStatus"]
