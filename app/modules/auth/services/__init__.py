# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/services/__init__.py
"""

from .authorization_gate import AuthorizationGate

__all__ = ["AuthorizationGate"]
