# -*- coding: utf-8 -*-
"""
backend/app/shared/core/http_client_cache.py

Gestión del cliente HTTP global compartido (httpx.AsyncClient).
Lo usan los clientes de proveedores de pago y el storage de comprobantes.

Autor: Seencel
Fecha: 2026-09-16
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Lock async para evitar creación concurrente del cliente HTTP
_http_client_lock = asyncio.Lock()
_http_client: Optional[httpx.AsyncClient] = None


def _build_client() -> httpx.AsyncClient:
    from app.shared.config import get_settings
    settings = get_settings()

    headers = {"User-Agent": f"{settings.app_name}/{settings.app_version}"}
    timeout = httpx.Timeout(connect=10.0, read=30.0, write=30.0, pool=30.0)
    limits = httpx.Limits(
        max_connections=20,
        max_keepalive_connections=10,
        keepalive_expiry=30.0,
    )
    # Reintenta solo fallos de conexión; nunca reenvía requests ya entregadas
    transport = httpx.AsyncHTTPTransport(retries=2)
    return httpx.AsyncClient(headers=headers, timeout=timeout, limits=limits, transport=transport)


async def get_http_client() -> httpx.AsyncClient:
    """Obtiene el cliente HTTP global. Si no existe, lo crea."""
    global _http_client
    if _http_client is None:
        async with _http_client_lock:
            if _http_client is None:
                logger.info("Inicializando cliente HTTP global")
                _http_client = _build_client()
    return _http_client


async def close_http_client() -> None:
    """Cierra el cliente global (shutdown de la app)."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        logger.debug("Cliente HTTP global cerrado")
    _http_client = None


__all__ = ["get_http_client", "close_http_client"]

# Fin del archivo backend/app/shared/core/http_client_cache.py
