# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/mercadopago_builder.py

Construcción de la preferencia de MercadoPago (Checkout Pro).

- external_reference: intent en codificación compacta (≤256 caracteres)
- metadata: el mismo intent como dict plano (respaldo al capturar)
- back_urls.success: endpoint de captura del backend
- notification_url: webhook con ?secret=

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.errors import ProviderError
from app.modules.auth.context import RequestContext
from app.modules.catalog.services.products import ProductRef
from app.modules.payments.codecs import CheckoutIntent, CompactIntentCodec
from app.modules.payments.providers.mercadopago_client import MercadoPagoClient
from .dto import ProviderCheckoutHandle
from .urls import MP_RETURN_PATH, product_page_url, return_url, webhook_url

logger = logging.getLogger(__name__)

DEFAULT_FIRST_NAME = "Usuario"
DEFAULT_LAST_NAME = "Seencel"


class MercadoPagoPreferenceBuilder:
    def __init__(
        self,
        settings: Optional[PaymentsSettings] = None,
        codec: Optional[CompactIntentCodec] = None,
    ) -> None:
        self.settings = settings or get_payments_settings()
        self.codec = codec or CompactIntentCodec(self.settings.mp_external_reference_max_length)

    def build(
        self,
        *,
        intent: CheckoutIntent,
        product: ProductRef,
        unit_price: Decimal,
        currency: str,
        payer: RequestContext,
    ) -> Dict[str, Any]:
        description = getattr(product, "description", None) or product.display_name
        return {
            "items": [
                {
                    "id": product.slug,
                    "category_id": "services",
                    "title": product.display_name,
                    "description": description,
                    "quantity": 1,
                    "unit_price": float(unit_price),
                    "currency_id": currency,
                }
            ],
            "payer": {
                "email": payer.email,
                "first_name": payer.first_name or DEFAULT_FIRST_NAME,
                "last_name": payer.last_name or DEFAULT_LAST_NAME,
            },
            "external_reference": self.codec.encode(intent),
            "back_urls": {
                "success": return_url(self.settings, MP_RETURN_PATH),
                "failure": product_page_url(self.settings, product, "failed"),
                "pending": product_page_url(self.settings, product, "pending"),
            },
            "notification_url": webhook_url(self.settings, "mercadopago"),
            "auto_return": "approved",
            "binary_mode": True,
            "statement_descriptor": self.settings.payments_statement_descriptor,
            "metadata": intent.as_metadata(),
        }

    async def create(self, client: MercadoPagoClient, payload: Dict[str, Any]) -> ProviderCheckoutHandle:
        data = await client.create_preference(payload)
        preference_id = data.get("id")
        redirect_url = data.get("init_point") or data.get("sandbox_init_point")
        if not preference_id or not redirect_url:
            logger.error("Respuesta de MercadoPago sin id/init_point: keys=%s", sorted(data))
            raise ProviderError(
                "MercadoPago devolvió una preferencia incompleta",
                provider="mercadopago",
                reason="invalid_response",
            )
        return ProviderCheckoutHandle(redirect_url=redirect_url, order_id=str(preference_id))


__all__ = ["MercadoPagoPreferenceBuilder"]

# Fin del archivo backend/app/modules/payments/facades/checkout/mercadopago_builder.py
