# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/providers/mercadopago_client.py

Cliente REST mínimo de MercadoPago.

Endpoints usados:
- POST /checkout/preferences   (crear preferencia de pago)
- GET  /v1/payments/{id}       (confirmar un pago)
- GET  /merchant_orders/{id}   (pagos de una orden comercial)

Autor: Seencel
Fecha: 2026-09-24
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.shared.config.settings_payments import get_payments_settings
from app.shared.core.http_client_cache import get_http_client
from app.shared.errors import ProviderError
from .base import send_json

logger = logging.getLogger(__name__)

PROVIDER_NAME = "mercadopago"
VALID_TOKEN_PREFIXES = ("APP_USR-", "TEST-")


class MercadoPagoClient:
    def __init__(
        self,
        access_token: Optional[str] = None,
        api_base: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_payments_settings()
        if access_token is None and settings.mp_access_token:
            access_token = settings.mp_access_token.get_secret_value()
        self._access_token = (access_token or "").strip()
        self.api_base = (api_base or settings.mp_api_base).rstrip("/")
        self._client = client
        self.timeout = timeout or settings.payments_provider_timeout_seconds

    @property
    def is_sandbox(self) -> bool:
        return self._access_token.startswith("TEST-")

    def _headers(self) -> Dict[str, str]:
        if not self._access_token.startswith(VALID_TOKEN_PREFIXES):
            logger.error("MP_ACCESS_TOKEN ausente o con formato inválido")
            raise ProviderError(
                "MercadoPago no está configurado",
                provider=PROVIDER_NAME,
                reason="misconfigured",
            )
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        headers = self._headers()
        client = self._client or await get_http_client()
        return await send_json(
            client,
            method,
            f"{self.api_base}{path}",
            provider=PROVIDER_NAME,
            timeout=self.timeout,
            headers=headers,
            **kwargs,
        )

    async def create_preference(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("POST", "/checkout/preferences", json=payload)
        logger.info("Preferencia MercadoPago creada: %s", data.get("id"))
        return data

    async def get_payment(self, payment_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/payments/{payment_id}")

    async def get_merchant_order(self, merchant_order_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/merchant_orders/{merchant_order_id}")


def get_mercadopago_client() -> MercadoPagoClient:
    """Dependencia FastAPI (sobrescribible en tests)."""
    return MercadoPagoClient()


__all__ = ["MercadoPagoClient", "get_mercadopago_client", "PROVIDER_NAME"]

# Fin del archivo backend/app/modules/payments/providers/mercadopago_client.py
