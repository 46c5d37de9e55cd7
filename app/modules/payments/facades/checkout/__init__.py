# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/__init__.py

Punto de entrada del submódulo de checkout del módulo Payments.

Autor: Seencel
Fecha: 2026-09-25
"""

from .dto import (
    CheckoutRequest,
    CheckoutResponse,
    FreeEnrollRequest,
    FreeEnrollResponse,
    ProviderCheckoutHandle,
)
from .mercadopago_builder import MercadoPagoPreferenceBuilder
from .paypal_builder import PayPalOrderBuilder
from .start_checkout import start_checkout
from .free_enroll import free_enroll

__all__ = [
    "CheckoutRequest",
    "CheckoutResponse",
    "FreeEnrollRequest",
    "FreeEnrollResponse",
    "ProviderCheckoutHandle",
    "MercadoPagoPreferenceBuilder",
    "PayPalOrderBuilder",
    "start_checkout",
    "free_enroll",
]

# Fin del archivo backend/app/modules/payments/facades/checkout/__init__.py
