# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/normalize.py

Normalización de notificaciones de webhook.

MercadoPago envía variantes del mismo evento según el canal (webhooks
vs IPN legacy): `type` o `topic`, prefijo `topic_`, sufijo `_wh`, y el
id en `data.id`, `?data.id=`, `?id=` o `resource` (a veces una URL).

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

MP_TOPIC_PAYMENT = "payment"
MP_TOPIC_MERCHANT_ORDER = "merchant_order"

PAYPAL_CAPTURE_COMPLETED = "PAYMENT.CAPTURE.COMPLETED"
PAYPAL_ORDER_APPROVED = "CHECKOUT.ORDER.APPROVED"


@dataclass(frozen=True)
class MercadoPagoNotification:
    topic: str
    resource_id: Optional[str]
    event_id: Optional[str] = None


def normalize_mp_topic(raw: Optional[str]) -> str:
    topic = (raw or "").strip().lower()
    if topic.startswith("topic_"):
        topic = topic[len("topic_"):]
    if topic.endswith("_wh"):
        topic = topic[: -len("_wh")]
    return topic


def _last_segment(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip().rstrip("/")
    if not text:
        return None
    return text.rsplit("/", 1)[-1]


def parse_mercadopago_notification(body: Mapping[str, Any], query: Mapping[str, str]) -> MercadoPagoNotification:
    topic = normalize_mp_topic(body.get("type") or body.get("topic") or query.get("type") or query.get("topic"))

    data = body.get("data") if isinstance(body.get("data"), Mapping) else {}
    resource_id = (
        data.get("id")
        or query.get("data.id")
        or query.get("id")
        or _last_segment(body.get("resource"))
    )
    event_id = body.get("id")
    return MercadoPagoNotification(
        topic=topic,
        resource_id=str(resource_id) if resource_id is not None else None,
        event_id=str(event_id) if event_id is not None else None,
    )


__all__ = [
    "MercadoPagoNotification",
    "normalize_mp_topic",
    "parse_mercadopago_notification",
    "MP_TOPIC_PAYMENT",
    "MP_TOPIC_MERCHANT_ORDER",
    "PAYPAL_CAPTURE_COMPLETED",
    "PAYPAL_ORDER_APPROVED",
]

# Fin del archivo backend/app/modules/payments/facades/capture/normalize.py
