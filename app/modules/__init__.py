# -*- coding: utf-8 -*-
"""
backend/app/modules/__init__.py

Módulos de dominio: auth, catalog, coupons, learning, organizations, payments.
"""

# Fin del archivo backend/app/modules/__init__.py
