# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend de pagos de Seencel.

Funciones:
- Asegura compatibilidad del event loop de asyncio en Windows
  (necesario para asyncpg y SQLAlchemy Async).
- Permite que los módulos internos puedan importarse como 'app.*'.

Autor: Seencel
Fecha: 2026-09-14
"""
import sys
import asyncio

# Fuerza un event loop compatible con drivers async en Windows
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Fin del archivo backend/app/__init__.py
