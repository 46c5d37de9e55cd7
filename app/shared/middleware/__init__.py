# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py
"""

from .exception_handler import register_exception_handlers, JSONExceptionMiddleware

__all__ = ["register_exception_handlers", "JSONExceptionMiddleware"]
