# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/__init__.py

Captura de pagos y fulfillment idempotente.

Autor: Seencel
Fecha: 2026-09-26
"""

from .dto import CaptureOutcome, CaptureResult, ProviderCapture
from .fulfillment_handler import FulfillmentHandler
from .paypal_capture import capture_paypal_order, handle_paypal_return, paypal_intent_resolver
from .mercadopago_capture import fetch_mercadopago_payment, handle_mercadopago_return, mercadopago_intent_resolver
from .webhooks import WebhookResult, process_mercadopago_webhook, process_paypal_webhook

__all__ = [
    "CaptureOutcome",
    "CaptureResult",
    "ProviderCapture",
    "FulfillmentHandler",
    "capture_paypal_order",
    "handle_paypal_return",
    "paypal_intent_resolver",
    "fetch_mercadopago_payment",
    "handle_mercadopago_return",
    "mercadopago_intent_resolver",
    "WebhookResult",
    "process_mercadopago_webhook",
    "process_paypal_webhook",
]

# Fin del archivo backend/app/modules/payments/facades/capture/__init__.py
