# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/paypal_capture.py

Adaptador PayPal → ProviderCapture.

- capture_paypal_order: POST capture (o GET si ya estaba capturada) y
  parseo de purchase_units[0].payments.captures[0]
- parse_paypal_capture_resource: recurso de PAYMENT.CAPTURE.COMPLETED
- handle_paypal_return: flujo completo del redirect del comprador

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.codecs import CheckoutIntent, resolve_paypal_intent
from app.modules.payments.enums import PaymentProvider
from app.modules.payments.providers.paypal_client import PayPalClient
from .dto import CaptureResult, ProviderCapture
from .fulfillment_handler import FulfillmentHandler

logger = logging.getLogger(__name__)

CAPTURE_COMPLETED = "COMPLETED"


def _parse_amount(amount: Optional[Dict[str, Any]]) -> tuple[Optional[Decimal], Optional[str]]:
    if not isinstance(amount, dict):
        return None, None
    try:
        value = Decimal(str(amount.get("value"))) if amount.get("value") is not None else None
    except InvalidOperation:
        value = None
    currency = (amount.get("currency_code") or "").upper() or None
    return value, currency


def _order_id_from_links(links: Any) -> Optional[str]:
    for link in links or []:
        if isinstance(link, dict) and link.get("rel") == "up" and link.get("href"):
            return str(link["href"]).rstrip("/").rsplit("/", 1)[-1]
    return None


def paypal_intent_resolver(capture: ProviderCapture) -> Optional[CheckoutIntent]:
    return resolve_paypal_intent(capture.correlation, capture.secondary_correlation)


def parse_paypal_order(order: Dict[str, Any], *, event_type: str = "return", event_id: Optional[str] = None) -> ProviderCapture:
    """Orden capturada (respuesta de capture o GET order) → ProviderCapture."""
    units = order.get("purchase_units") or [{}]
    unit = units[0] if isinstance(units[0], dict) else {}
    captures = ((unit.get("payments") or {}).get("captures")) or []
    capture = captures[0] if captures and isinstance(captures[0], dict) else {}

    amount, currency = _parse_amount(capture.get("amount") or unit.get("amount"))
    status = str(capture.get("status") or order.get("status") or "unknown")

    return ProviderCapture(
        provider=PaymentProvider.PAYPAL,
        provider_payment_id=capture.get("id"),
        status=status,
        approved=capture.get("status") == CAPTURE_COMPLETED,
        amount=amount,
        currency=currency,
        correlation=capture.get("custom_id") or unit.get("custom_id"),
        secondary_correlation=capture.get("invoice_id") or unit.get("invoice_id"),
        order_id=order.get("id"),
        event_type=event_type,
        event_id=event_id,
        raw=order,
    )


def parse_paypal_capture_resource(
    resource: Dict[str, Any],
    *,
    event_type: str,
    event_id: Optional[str] = None,
    raw: Optional[Dict[str, Any]] = None,
) -> ProviderCapture:
    """Recurso `capture` de un webhook PAYMENT.CAPTURE.* → ProviderCapture."""
    amount, currency = _parse_amount(resource.get("amount"))
    related = (resource.get("supplementary_data") or {}).get("related_ids") or {}
    status = str(resource.get("status") or "unknown")
    return ProviderCapture(
        provider=PaymentProvider.PAYPAL,
        provider_payment_id=resource.get("id"),
        status=status,
        approved=status == CAPTURE_COMPLETED,
        amount=amount,
        currency=currency,
        correlation=resource.get("custom_id"),
        secondary_correlation=resource.get("invoice_id"),
        order_id=related.get("order_id") or _order_id_from_links(resource.get("links")),
        event_type=event_type,
        event_id=event_id,
        raw=raw or resource,
    )


async def capture_paypal_order(
    client: PayPalClient,
    order_id: str,
    *,
    event_type: str = "return",
    event_id: Optional[str] = None,
) -> ProviderCapture:
    order = await client.capture_order(order_id)
    return parse_paypal_order(order, event_type=event_type, event_id=event_id)


async def handle_paypal_return(
    session: AsyncSession,
    *,
    order_id: str,
    client: PayPalClient,
    handler: Optional[FulfillmentHandler] = None,
) -> CaptureResult:
    """Redirect del comprador: captura + fulfillment. Errores del proveedor se propagan sin mutar nada."""
    capture = await capture_paypal_order(client, order_id)
    return await (handler or FulfillmentHandler()).process(session, capture, paypal_intent_resolver)


__all__ = [
    "capture_paypal_order",
    "handle_paypal_return",
    "parse_paypal_order",
    "parse_paypal_capture_resource",
    "paypal_intent_resolver",
]

# Fin del archivo backend/app/modules/payments/facades/capture/paypal_capture.py
