# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/providers/base.py

Helper común de requests HTTP a proveedores de pago.

- Timeout / error de red → ProviderUnavailable (504; el webhook responde 503)
- Respuesta no-2xx → ProviderError con status y body del proveedor
- Sin reintentos más allá de los de conexión del transporte httpx

Autor: Seencel
Fecha: 2026-09-24
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.shared.errors import ProviderError, ProviderUnavailable

logger = logging.getLogger(__name__)

_LOG_BODY_LIMIT = 300


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


async def send_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Ejecuta la request y devuelve el body JSON (dict vacío si no hay)."""
    try:
        response = await client.request(method, url, timeout=timeout, **kwargs)
    except httpx.TimeoutException as e:
        logger.warning("%s: timeout en %s %s", provider, method, url)
        raise ProviderUnavailable(f"{provider} no respondió a tiempo", reason="timeout") from e
    except httpx.TransportError as e:
        logger.warning("%s: error de red en %s %s: %s", provider, method, url, e)
        raise ProviderUnavailable(f"No se pudo contactar a {provider}", reason="network") from e

    if not response.is_success:
        logger.error(
            "%s: %s %s respondió %s - %s",
            provider, method, url, response.status_code, response.text[:_LOG_BODY_LIMIT],
        )
        raise ProviderError(
            f"{provider} rechazó la solicitud ({response.status_code})",
            provider=provider,
            provider_status=response.status_code,
            provider_body=_safe_json(response),
        )

    body = _safe_json(response)
    return body if isinstance(body, dict) else {}


__all__ = ["send_json"]

# Fin del archivo backend/app/modules/payments/providers/base.py
