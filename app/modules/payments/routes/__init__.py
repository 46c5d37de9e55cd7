# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- /payments/checkout/{mercadopago,paypal,free-enroll}
- /payments/paypal/return, /payments/mp/return
- /payments/webhooks/{paypal,mercadopago}
- /payments/bank-transfers/*

Autor: Seencel
Fecha: 2026-09-28
"""

from fastapi import APIRouter

from .checkout import router as checkout_router
from .capture import router as capture_router
from .webhooks import router as webhooks_router
from .bank_transfers import router as bank_transfers_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(checkout_router, prefix="/payments")
router.include_router(capture_router, prefix="/payments")
router.include_router(webhooks_router, prefix="/payments")
router.include_router(bank_transfers_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
