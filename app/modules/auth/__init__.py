# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/__init__.py

Identidad de sesión y verificaciones de rol (Authorization Gate).
La emisión de sesiones es externa: aquí solo se validan tokens.
"""
