# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/providers/__init__.py

Clientes HTTP de proveedores de pago.
"""

from .mercadopago_client import MercadoPagoClient, get_mercadopago_client
from .paypal_client import PayPalClient, get_paypal_client, clear_token_cache

__all__ = [
    "MercadoPagoClient",
    "get_mercadopago_client",
    "PayPalClient",
    "get_paypal_client",
    "clear_token_cache",
]
