# -*- coding: utf-8 -*-
"""
backend/app/observability/__init__.py

Observabilidad HTTP (Prometheus).
"""

from .prom import setup_observability

__all__ = ["setup_observability"]

# Fin del archivo backend/app/observability/__init__.py
