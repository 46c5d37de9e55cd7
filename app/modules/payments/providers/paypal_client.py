# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/providers/paypal_client.py

Cliente REST mínimo de PayPal (Orders v2).

- OAuth client_credentials con cache in-memory del token (TTL de PayPal
  menos 60s de margen; cada réplica obtiene el suyo)
- POST /v2/checkout/orders              (crear orden)
- POST /v2/checkout/orders/{id}/capture (capturar)
- GET  /v2/checkout/orders/{id}         (consultar)

Autor: Seencel
Fecha: 2026-09-24
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from app.shared.config.settings_payments import get_payments_settings
from app.shared.core.http_client_cache import get_http_client
from app.shared.errors import ProviderError
from .base import send_json

logger = logging.getLogger(__name__)

PROVIDER_NAME = "paypal"
ORDER_ALREADY_CAPTURED = "ORDER_ALREADY_CAPTURED"

# cache_key -> (token, expires_at epoch)
_token_cache: Dict[str, Tuple[str, float]] = {}


def _get_cached_token(cache_key: str) -> Optional[str]:
    entry = _token_cache.get(cache_key)
    if entry is None:
        return None
    token, expires_at = entry
    if time.time() >= expires_at:
        del _token_cache[cache_key]
        return None
    return token


def _set_cached_token(cache_key: str, token: str, expires_in: int) -> None:
    ttl = max(expires_in - 60, 60)
    _token_cache[cache_key] = (token, time.time() + ttl)


def clear_token_cache() -> None:
    _token_cache.clear()


def _is_already_captured(error: ProviderError) -> bool:
    if error.provider_status != 422 or not isinstance(error.provider_body, dict):
        return False
    details = error.provider_body.get("details") or []
    return any(isinstance(d, dict) and d.get("issue") == ORDER_ALREADY_CAPTURED for d in details)


class PayPalClient:
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        api_base: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_payments_settings()
        self.client_id = client_id if client_id is not None else settings.paypal_client_id
        if client_secret is None and settings.paypal_client_secret:
            client_secret = settings.paypal_client_secret.get_secret_value()
        self._client_secret = client_secret
        self.api_base = (api_base or settings.paypal_base_url).rstrip("/")
        self._client = client
        self.timeout = timeout or settings.payments_provider_timeout_seconds

    async def _http(self) -> httpx.AsyncClient:
        return self._client or await get_http_client()

    async def get_access_token(self) -> str:
        if not self.client_id or not self._client_secret:
            logger.error("PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET no configurados")
            raise ProviderError("PayPal no está configurado", provider=PROVIDER_NAME, reason="misconfigured")

        cache_key = f"{self.api_base}:{self.client_id}"
        cached = _get_cached_token(cache_key)
        if cached:
            return cached

        data = await send_json(
            await self._http(),
            "POST",
            f"{self.api_base}/v1/oauth2/token",
            provider=PROVIDER_NAME,
            timeout=self.timeout,
            auth=(self.client_id, self._client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        token = data.get("access_token")
        if not token:
            raise ProviderError("PayPal no devolvió access_token", provider=PROVIDER_NAME, reason="oauth")
        _set_cached_token(cache_key, token, int(data.get("expires_in") or 300))
        return token

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        token = await self.get_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        return await send_json(
            await self._http(),
            method,
            f"{self.api_base}{path}",
            provider=PROVIDER_NAME,
            timeout=self.timeout,
            headers=headers,
            **kwargs,
        )

    async def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("POST", "/v2/checkout/orders", json=payload)
        logger.info("Orden PayPal creada: %s", data.get("id"))
        return data

    async def get_order(self, order_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v2/checkout/orders/{order_id}")

    async def capture_order(self, order_id: str) -> Dict[str, Any]:
        """Captura la orden; si ya estaba capturada devuelve la orden consultada."""
        try:
            return await self._request("POST", f"/v2/checkout/orders/{order_id}/capture", json={})
        except ProviderError as e:
            if not _is_already_captured(e):
                raise
            logger.info("Orden PayPal %s ya capturada; consultando estado", order_id)
            return await self.get_order(order_id)


def get_paypal_client() -> PayPalClient:
    """Dependencia FastAPI (sobrescribible en tests)."""
    return PayPalClient()


__all__ = ["PayPalClient", "get_paypal_client", "clear_token_cache", "PROVIDER_NAME"]

# Fin del archivo backend/app/modules/payments/providers/paypal_client.py
