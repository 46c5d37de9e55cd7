# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/urls.py

URLs públicas que se registran en el proveedor (retorno, cancelación y
webhook con el secreto compartido en la query).

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from app.shared.config.settings_payments import PaymentsSettings
from app.modules.catalog.services.products import CourseProduct, ProductRef

logger = logging.getLogger(__name__)

MP_RETURN_PATH = "/payments/mp/return"
PAYPAL_RETURN_PATH = "/payments/paypal/return"
WEBHOOK_PATH = "/payments/webhooks/{provider}"


def return_url(settings: PaymentsSettings, path: str) -> str:
    return f"{settings.payments_return_base_url.rstrip('/')}{path}"


def webhook_url(settings: PaymentsSettings, provider: str) -> str:
    url = f"{settings.payments_webhook_base_url.rstrip('/')}{WEBHOOK_PATH.format(provider=provider)}"
    secret = settings.webhook_secret
    if not secret:
        logger.warning("PAYMENTS_WEBHOOK_SECRET no configurado; los webhooks de %s serán rechazados", provider)
        return url
    return f"{url}?{urlencode({'secret': secret})}"


def product_page_url(settings: PaymentsSettings, product: ProductRef, payment_status: str) -> str:
    """Página del frontend a la que vuelve el usuario si no pagó."""
    if isinstance(product, CourseProduct):
        base = f"{settings.frontend_url.rstrip('/')}/learning/courses/{quote(product.slug)}"
    else:
        base = settings.billing_url
    return f"{base}?{urlencode({'payment': payment_status})}"


__all__ = ["return_url", "webhook_url", "product_page_url", "MP_RETURN_PATH", "PAYPAL_RETURN_PATH"]

# Fin del archivo backend/app/modules/payments/facades/checkout/urls.py
