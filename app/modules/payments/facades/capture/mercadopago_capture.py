# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/mercadopago_capture.py

Adaptador MercadoPago → ProviderCapture.

MercadoPago no requiere captura explícita (binary_mode): el pago se
confirma consultando GET /v1/payments/{id}. La correlación es el
`external_reference` de la preferencia.

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.codecs import CheckoutIntent, resolve_mercadopago_intent
from app.modules.payments.enums import PaymentProvider
from app.modules.payments.providers.mercadopago_client import MercadoPagoClient
from .dto import CaptureResult, ProviderCapture
from .fulfillment_handler import FulfillmentHandler

logger = logging.getLogger(__name__)

STATUS_APPROVED = "approved"


def mercadopago_intent_resolver(capture: ProviderCapture) -> Optional[CheckoutIntent]:
    metadata = capture.raw.get("metadata") if isinstance(capture.raw, dict) else None
    intent = resolve_mercadopago_intent(capture.correlation, metadata)
    if intent is None and capture.secondary_correlation:
        intent = resolve_mercadopago_intent(capture.secondary_correlation, metadata)
    return intent


def parse_mercadopago_payment(
    payment: Dict[str, Any],
    *,
    event_type: str = "payment",
    event_id: Optional[str] = None,
) -> ProviderCapture:
    try:
        amount = Decimal(str(payment["transaction_amount"])) if payment.get("transaction_amount") is not None else None
    except InvalidOperation:
        amount = None
    status = str(payment.get("status") or "unknown")
    order = payment.get("order") or {}
    metadata = payment.get("metadata") or {}
    payment_id = payment.get("id")

    return ProviderCapture(
        provider=PaymentProvider.MERCADOPAGO,
        provider_payment_id=str(payment_id) if payment_id is not None else None,
        status=status,
        approved=status == STATUS_APPROVED,
        amount=amount,
        currency=(payment.get("currency_id") or "").upper() or None,
        correlation=payment.get("external_reference") or None,
        # Algunas integraciones repiten la referencia en metadata
        secondary_correlation=metadata.get("external_reference") if isinstance(metadata, dict) else None,
        order_id=str(order["id"]) if isinstance(order, dict) and order.get("id") else None,
        event_type=event_type,
        event_id=event_id,
        raw=payment,
    )


async def fetch_mercadopago_payment(
    client: MercadoPagoClient,
    payment_id: str,
    *,
    event_type: str = "payment",
    event_id: Optional[str] = None,
) -> ProviderCapture:
    payment = await client.get_payment(payment_id)
    return parse_mercadopago_payment(payment, event_type=event_type, event_id=event_id)


async def handle_mercadopago_return(
    session: AsyncSession,
    *,
    payment_id: str,
    client: MercadoPagoClient,
    handler: Optional[FulfillmentHandler] = None,
) -> CaptureResult:
    capture = await fetch_mercadopago_payment(client, payment_id, event_type="return")
    return await (handler or FulfillmentHandler()).process(session, capture, mercadopago_intent_resolver)


__all__ = [
    "fetch_mercadopago_payment",
    "handle_mercadopago_return",
    "parse_mercadopago_payment",
    "mercadopago_intent_resolver",
]

# Fin del archivo backend/app/modules/payments/facades/capture/mercadopago_capture.py
