# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/webhooks.py

Procesamiento de webhooks ya autenticados (el secreto se valida en la ruta).

Los tipos de evento no soportados se ignoran (200) para que el proveedor
no reintente. Errores de red con el proveedor se propagan como
ProviderUnavailable (la ruta responde 503 y el proveedor reintenta).
Si el fulfillment falla y se compensa, `needs_retry` indica que la ruta
debe responder 503: el reenvío del webhook es el reintento.

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.providers.mercadopago_client import MercadoPagoClient
from app.modules.payments.providers.paypal_client import PayPalClient
from .dto import CaptureOutcome, CaptureResult
from .fulfillment_handler import FulfillmentHandler
from .mercadopago_capture import fetch_mercadopago_payment, mercadopago_intent_resolver, STATUS_APPROVED
from .normalize import (
    MP_TOPIC_MERCHANT_ORDER,
    MP_TOPIC_PAYMENT,
    PAYPAL_CAPTURE_COMPLETED,
    PAYPAL_ORDER_APPROVED,
    parse_mercadopago_notification,
)
from .paypal_capture import capture_paypal_order, parse_paypal_capture_resource, paypal_intent_resolver

logger = logging.getLogger(__name__)

OUTCOME_IGNORED = "ignored"
OUTCOME_PROCESSED = "processed"


@dataclass
class WebhookResult:
    outcome: str
    event_type: str = ""
    results: List[CaptureResult] = field(default_factory=list)

    @property
    def needs_retry(self) -> bool:
        """Algún pago quedó compensado: el proveedor debe reenviar el evento."""
        return any(r.outcome == CaptureOutcome.FAILED for r in self.results)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"received": True, "outcome": self.outcome}
        if len(self.results) > 1:
            body["results"] = [
                {"outcome": r.outcome.value, "providerPaymentId": r.provider_payment_id} for r in self.results
            ]
        return body


def _single(event_type: str, result: CaptureResult) -> WebhookResult:
    return WebhookResult(outcome=result.outcome.value, event_type=event_type, results=[result])


# ------------------------------------------------------------------ #
# PayPal
# ------------------------------------------------------------------ #
async def process_paypal_webhook(
    session: AsyncSession,
    payload: Mapping[str, Any],
    *,
    client: PayPalClient,
    handler: Optional[FulfillmentHandler] = None,
) -> WebhookResult:
    handler = handler or FulfillmentHandler()
    event_type = str(payload.get("event_type") or "")
    event_id = payload.get("id")
    resource = payload.get("resource") if isinstance(payload.get("resource"), Mapping) else {}

    if event_type == PAYPAL_CAPTURE_COMPLETED:
        capture = parse_paypal_capture_resource(
            dict(resource), event_type=event_type, event_id=event_id, raw=dict(payload)
        )
        if not capture.correlation and capture.order_id:
            # El recurso de captura no siempre repite custom_id
            order = await client.get_order(capture.order_id)
            units = order.get("purchase_units") or [{}]
            unit = units[0] if isinstance(units[0], dict) else {}
            capture = capture.model_copy(
                update={
                    "correlation": unit.get("custom_id"),
                    "secondary_correlation": capture.secondary_correlation or unit.get("invoice_id"),
                }
            )
        return _single(event_type, await handler.process(session, capture, paypal_intent_resolver))

    if event_type == PAYPAL_ORDER_APPROVED:
        order_id = resource.get("id")
        if not order_id:
            logger.warning("PayPal %s sin resource.id; ignorado", event_type)
            return WebhookResult(outcome=OUTCOME_IGNORED, event_type=event_type)
        capture = await capture_paypal_order(client, str(order_id), event_type=event_type, event_id=event_id)
        return _single(event_type, await handler.process(session, capture, paypal_intent_resolver))

    logger.info("Webhook PayPal ignorado: event_type=%s id=%s", event_type, event_id)
    return WebhookResult(outcome=OUTCOME_IGNORED, event_type=event_type)


# ------------------------------------------------------------------ #
# MercadoPago
# ------------------------------------------------------------------ #
async def process_mercadopago_webhook(
    session: AsyncSession,
    body: Mapping[str, Any],
    query: Mapping[str, str],
    *,
    client: MercadoPagoClient,
    handler: Optional[FulfillmentHandler] = None,
) -> WebhookResult:
    handler = handler or FulfillmentHandler()
    notification = parse_mercadopago_notification(body, query)

    if not notification.resource_id or notification.topic not in (MP_TOPIC_PAYMENT, MP_TOPIC_MERCHANT_ORDER):
        logger.info(
            "Webhook MercadoPago ignorado: topic=%s resource=%s",
            notification.topic or "-", notification.resource_id,
        )
        return WebhookResult(outcome=OUTCOME_IGNORED, event_type=notification.topic)

    if notification.topic == MP_TOPIC_PAYMENT:
        capture = await fetch_mercadopago_payment(
            client, notification.resource_id, event_type=MP_TOPIC_PAYMENT, event_id=notification.event_id
        )
        return _single(MP_TOPIC_PAYMENT, await handler.process(session, capture, mercadopago_intent_resolver))

    merchant_order = await client.get_merchant_order(notification.resource_id)
    approved_ids = [
        str(p["id"])
        for p in merchant_order.get("payments") or []
        if isinstance(p, Mapping) and p.get("id") is not None and p.get("status") == STATUS_APPROVED
    ]
    if not approved_ids:
        logger.info("merchant_order %s sin pagos aprobados todavía", notification.resource_id)
        return WebhookResult(outcome=OUTCOME_IGNORED, event_type=MP_TOPIC_MERCHANT_ORDER)

    results: List[CaptureResult] = []
    for payment_id in approved_ids:
        capture = await fetch_mercadopago_payment(
            client, payment_id, event_type=MP_TOPIC_MERCHANT_ORDER, event_id=notification.event_id
        )
        results.append(await handler.process(session, capture, mercadopago_intent_resolver))

    outcome = results[0].outcome.value if len(results) == 1 else OUTCOME_PROCESSED
    return WebhookResult(outcome=outcome, event_type=MP_TOPIC_MERCHANT_ORDER, results=results)


__all__ = ["WebhookResult", "process_paypal_webhook", "process_mercadopago_webhook"]

# Fin del archivo backend/app/modules/payments/facades/capture/webhooks.py
