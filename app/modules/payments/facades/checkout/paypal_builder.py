# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/paypal_builder.py

Construcción de la orden de PayPal (Orders v2, intent CAPTURE).

- custom_id: intent delimitado `user|product|org|period`
- invoice_id: referencia `k:v;...` con cupón y timestamp (único por orden)
- return_url: endpoint de captura del backend

El webhook de PayPal se registra en el dashboard del proveedor; su URL
(con ?secret=) es configuración, no parte del payload.

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.errors import ProviderError
from app.modules.catalog.services.products import ProductRef
from app.modules.payments.codecs import CheckoutIntent, DelimitedIntentCodec, InvoiceReferenceCodec
from app.modules.payments.providers.paypal_client import PayPalClient
from .dto import ProviderCheckoutHandle
from .urls import PAYPAL_RETURN_PATH, product_page_url, return_url

logger = logging.getLogger(__name__)

_APPROVE_RELS = ("approve", "payer-action")
_DESCRIPTION_LIMIT = 127


class PayPalOrderBuilder:
    def __init__(
        self,
        settings: Optional[PaymentsSettings] = None,
        codec: Optional[DelimitedIntentCodec] = None,
        invoice_codec: Optional[InvoiceReferenceCodec] = None,
    ) -> None:
        self.settings = settings or get_payments_settings()
        max_length = self.settings.payments_metadata_max_length
        self.codec = codec or DelimitedIntentCodec(max_length)
        self.invoice_codec = invoice_codec or InvoiceReferenceCodec(max_length)

    def build(
        self,
        *,
        intent: CheckoutIntent,
        product: ProductRef,
        unit_price: Decimal,
        currency: str,
    ) -> Dict[str, Any]:
        return {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "reference_id": product.slug,
                    "description": product.display_name[:_DESCRIPTION_LIMIT],
                    "custom_id": self.codec.encode(intent),
                    "invoice_id": self.invoice_codec.encode(intent),
                    "amount": {
                        "currency_code": currency,
                        "value": f"{unit_price:.2f}",
                    },
                }
            ],
            "application_context": {
                "brand_name": self.settings.paypal_brand_name,
                "user_action": "PAY_NOW",
                "shipping_preference": "NO_SHIPPING",
                "return_url": return_url(self.settings, PAYPAL_RETURN_PATH),
                "cancel_url": product_page_url(self.settings, product, "cancelled"),
            },
        }

    async def create(self, client: PayPalClient, payload: Dict[str, Any]) -> ProviderCheckoutHandle:
        data = await client.create_order(payload)
        order_id = data.get("id")
        approve_url = next(
            (
                link.get("href")
                for link in data.get("links") or []
                if isinstance(link, dict) and link.get("rel") in _APPROVE_RELS
            ),
            None,
        )
        if not order_id or not approve_url:
            logger.error("Respuesta de PayPal sin id/approve link: keys=%s", sorted(data))
            raise ProviderError(
                "PayPal devolvió una orden incompleta",
                provider="paypal",
                reason="invalid_response",
            )
        return ProviderCheckoutHandle(redirect_url=approve_url, order_id=str(order_id))


__all__ = ["PayPalOrderBuilder"]

# Fin del archivo backend/app/modules/payments/facades/checkout/paypal_builder.py
