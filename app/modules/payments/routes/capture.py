# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/capture.py

Destinos de redirect del comprador tras aprobar el pago.

Endpoints (sin auth; la identidad viaja en la metadata del proveedor):
- GET /payments/paypal/return?token=<order_id>
- GET /payments/mp/return?payment_id=<id> (o collection_id)

Responden HTML y disparan la captura + fulfillment de forma síncrona.

Autor: Seencel
Fecha: 2026-09-28
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.database import get_async_session
from app.shared.errors import PaymentsError, ProviderError, ProviderUnavailable
from app.modules.payments.facades.capture import handle_mercadopago_return, handle_paypal_return
from app.modules.payments.facades.capture.pages import render_capture_result, render_error
from app.modules.payments.providers import (
    MercadoPagoClient,
    PayPalClient,
    get_mercadopago_client,
    get_paypal_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments:capture"])


def _html(body: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(content=body, status_code=status_code)


def _error_page(e: PaymentsError, billing_url: str) -> HTMLResponse:
    if isinstance(e, (ProviderError, ProviderUnavailable)):
        return _html(*render_error("No pudimos confirmar el pago con el proveedor.", billing_url, 502))
    return _html(*render_error(e.message, billing_url, e.status_code))


@router.get("/paypal/return", response_class=HTMLResponse)
async def paypal_return(
    token: Optional[str] = Query(default=None, description="Order id de PayPal"),
    payer_id: Optional[str] = Query(default=None, alias="PayerID"),
    session: AsyncSession = Depends(get_async_session),
    client: PayPalClient = Depends(get_paypal_client),
) -> HTMLResponse:
    billing_url = get_payments_settings().billing_url
    if not token:
        return _html(*render_error("Falta el identificador de la orden.", billing_url, 400))

    try:
        result = await handle_paypal_return(session, order_id=token, client=client)
    except PaymentsError as e:
        logger.warning("PayPal return order=%s falló: %s", token, e.message)
        return _error_page(e, billing_url)
    return _html(*render_capture_result(result, billing_url))


@router.get("/mp/return", response_class=HTMLResponse)
async def mercadopago_return(
    payment_id: Optional[str] = Query(default=None),
    collection_id: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_async_session),
    client: MercadoPagoClient = Depends(get_mercadopago_client),
) -> HTMLResponse:
    billing_url = get_payments_settings().billing_url
    mp_payment_id = payment_id or collection_id
    if not mp_payment_id or mp_payment_id == "null":
        return _html(*render_error("Falta el identificador del pago.", billing_url, 400))

    try:
        result = await handle_mercadopago_return(session, payment_id=mp_payment_id, client=client)
    except PaymentsError as e:
        logger.warning("MP return payment=%s falló: %s", mp_payment_id, e.message)
        return _error_page(e, billing_url)
    return _html(*render_capture_result(result, billing_url))


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/capture.py
