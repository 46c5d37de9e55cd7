# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/__init__.py

Codecs del CheckoutIntent para los campos de correlación de cada proveedor.

Autor: Seencel
Fecha: 2026-09-23
"""

from .intent import CheckoutIntent, IntentCodec, DEFAULT_MAX_LENGTH
from .delimited import DelimitedIntentCodec
from .compact import CompactIntentCodec
from .invoice_reference import InvoiceReferenceCodec
from .resolver import resolve_mercadopago_intent, resolve_paypal_intent

__all__ = [
    "CheckoutIntent",
    "IntentCodec",
    "DEFAULT_MAX_LENGTH",
    "DelimitedIntentCodec",
    "CompactIntentCodec",
    "InvoiceReferenceCodec",
    "resolve_paypal_intent",
    "resolve_mercadopago_intent",
]

# Fin del archivo backend/app/modules/payments/codecs/__init__.py
