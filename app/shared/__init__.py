# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración, base de datos, errores,
middleware y clientes HTTP.

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.
"""

# Fin del archivo backend/app/shared/__init__.py
