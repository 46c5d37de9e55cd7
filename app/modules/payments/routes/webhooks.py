# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks.py

Webhooks de proveedores.

Endpoints:
- POST /payments/webhooks/paypal?secret=...
- POST /payments/webhooks/mercadopago?secret=...

Autenticación por secreto compartido en la URL (hmac.compare_digest).
Sin secreto configurado se rechaza todo. ProviderUnavailable y los
fulfillments compensados responden 503 para que el proveedor reintente.

Autor: Seencel
Fecha: 2026-09-28
"""

from __future__ import annotations

import hmac
import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.database import get_async_session
from app.shared.errors import ProviderUnavailable, Unauthorized, ValidationError
from app.modules.payments.facades.capture import WebhookResult, process_mercadopago_webhook, process_paypal_webhook
from app.modules.payments.metrics import observe_webhook_received, observe_webhook_rejected
from app.modules.payments.providers import (
    MercadoPagoClient,
    PayPalClient,
    get_mercadopago_client,
    get_paypal_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def verify_webhook_secret(provider: str, secret: Optional[str]) -> None:
    expected = get_payments_settings().webhook_secret
    if not expected:
        logger.error("PAYMENTS_WEBHOOK_SECRET no configurado; webhook %s rechazado", provider)
        observe_webhook_rejected(provider, "secret_not_configured")
        raise Unauthorized("Webhook no autorizado", reason="invalid_secret")
    if not secret or not hmac.compare_digest(secret.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Webhook %s con secreto inválido", provider)
        observe_webhook_rejected(provider, "invalid_secret")
        raise Unauthorized("Webhook no autorizado", reason="invalid_secret")


async def _read_json(request: Request, provider: str, *, allow_empty: bool) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        if allow_empty:
            return {}
        observe_webhook_rejected(provider, "empty_body")
        raise ValidationError("Body vacío", reason="empty_body")
    try:
        data = json.loads(raw)
    except ValueError as e:
        observe_webhook_rejected(provider, "invalid_json")
        raise ValidationError("Body JSON inválido", reason="invalid_json") from e
    if not isinstance(data, dict):
        observe_webhook_rejected(provider, "invalid_json")
        raise ValidationError("Body JSON inválido", reason="invalid_json")
    return data


def _unavailable(provider: str, e: ProviderUnavailable) -> JSONResponse:
    observe_webhook_rejected(provider, "provider_unavailable")
    logger.warning("Webhook %s: proveedor no disponible (%s); se espera reintento", provider, e.reason)
    body = e.to_body()
    body["status"] = 503
    return JSONResponse(status_code=503, content=body)


def _respond(provider: str, result: WebhookResult) -> JSONResponse:
    if result.needs_retry:
        # El payment se compensó; sin 5xx el proveedor no reenvía el evento
        observe_webhook_rejected(provider, "fulfillment_failed")
        logger.warning("Webhook %s: fulfillment fallido y compensado; se solicita reenvío", provider)
        return JSONResponse(status_code=503, content=result.to_body())
    return JSONResponse(status_code=200, content=result.to_body())


@router.post("/paypal")
async def paypal_webhook(
    request: Request,
    secret: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_async_session),
    client: PayPalClient = Depends(get_paypal_client),
) -> JSONResponse:
    verify_webhook_secret("paypal", secret)
    observe_webhook_received("paypal")

    payload = await _read_json(request, "paypal", allow_empty=False)
    try:
        result = await process_paypal_webhook(session, payload, client=client)
    except ProviderUnavailable as e:
        return _unavailable("paypal", e)
    return _respond("paypal", result)


@router.post("/mercadopago")
async def mercadopago_webhook(
    request: Request,
    secret: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_async_session),
    client: MercadoPagoClient = Depends(get_mercadopago_client),
) -> JSONResponse:
    verify_webhook_secret("mercadopago", secret)
    observe_webhook_received("mercadopago")

    # IPN legacy notifica solo por query (?topic=&id=)
    body = await _read_json(request, "mercadopago", allow_empty=True)
    try:
        result = await process_mercadopago_webhook(
            session, body, dict(request.query_params), client=client
        )
    except ProviderUnavailable as e:
        return _unavailable("mercadopago", e)
    return _respond("mercadopago", result)


__all__ = ["router", "verify_webhook_secret"]

# Fin del archivo backend/app/modules/payments/routes/webhooks.py
