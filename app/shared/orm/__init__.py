# -*- coding: utf-8 -*-
"""
backend/app/shared/orm/__init__.py

Configuración ORM compartida.
"""

from .model_registry import import_all_models

__all__ = ["import_all_models"]
