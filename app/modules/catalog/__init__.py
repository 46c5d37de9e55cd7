# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/__init__.py

Catálogo de productos vendibles (cursos y planes) y precios.
"""
