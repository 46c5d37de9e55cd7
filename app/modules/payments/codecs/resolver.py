# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/resolver.py

Reconstrucción del intent de una captura a partir de los campos de
correlación de cada proveedor:

- PayPal: `custom_id` + `invoice_id`
- MercadoPago: `external_reference` + `metadata` del pago

Autor: Seencel
Fecha: 2026-09-23
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from app.modules.payments.enums import BillingPeriod, ProductType
from .compact import CompactIntentCodec
from .delimited import SEPARATOR, DelimitedIntentCodec
from .intent import CheckoutIntent
from .invoice_reference import InvoiceReferenceCodec

logger = logging.getLogger(__name__)

_delimited = DelimitedIntentCodec()
_compact = CompactIntentCodec()
_invoice = InvoiceReferenceCodec()

_PERIODS = {p.value for p in BillingPeriod}


def _decode_legacy_pipe(raw: Optional[str]) -> Optional[CheckoutIntent]:
    """
    Formas de custom_id de órdenes anteriores al formato de 4 campos fijos:

        user_id|course_id
        user_id|course_id|coupon_code|coupon_id
    """
    if not raw or not isinstance(raw, str) or SEPARATOR not in raw:
        return None
    parts = [p.strip() for p in raw.split(SEPARATOR)]
    if not parts[0] or not parts[1]:
        return None

    if len(parts) == 2:
        return CheckoutIntent(user_id=parts[0], product_type=ProductType.COURSE, product_id=parts[1])

    if len(parts) == 4 and parts[2] and parts[3] not in _PERIODS:
        return CheckoutIntent(
            user_id=parts[0],
            product_type=ProductType.COURSE,
            product_id=parts[1],
            coupon_code=parts[2],
            coupon_id=parts[3] or None,
        )
    return None


def _with_invoice_coupon(intent: CheckoutIntent, invoice_id: Optional[str]) -> CheckoutIntent:
    invoice = InvoiceReferenceCodec.parse(invoice_id)
    if invoice.get("cpn") or invoice.get("cid"):
        return replace(intent, coupon_code=invoice.get("cpn"), coupon_id=invoice.get("cid"))
    return intent


def resolve_paypal_intent(
    custom_id: Optional[str],
    invoice_id: Optional[str] = None,
) -> Optional[CheckoutIntent]:
    """
    1. custom_id delimitado + cupón tomado del invoice_id.
    2. custom_id delimitado legacy (2 o 4 campos con cupón).
    3. custom_id en base64 compacto (órdenes legacy).
    4. invoice_id completo.
    """
    intent = _delimited.decode(custom_id)
    if intent is not None:
        return _with_invoice_coupon(intent, invoice_id)

    intent = _decode_legacy_pipe(custom_id)
    if intent is not None:
        logger.info("custom_id decodificado con el formato delimitado legacy")
        return _with_invoice_coupon(intent, invoice_id)

    intent = _compact.decode(custom_id)
    if intent is not None:
        logger.info("custom_id decodificado con el formato compacto legacy")
        return intent

    intent = _invoice.decode(invoice_id)
    if intent is not None:
        logger.info("Intent reconstruido desde invoice_id (custom_id ausente o malformado)")
    return intent


def resolve_mercadopago_intent(
    external_reference: Optional[str],
    metadata: Optional[Mapping[str, Any]] = None,
) -> Optional[CheckoutIntent]:
    """
    external_reference compacto (o delimitado en preferencias antiguas).
    El `metadata` del pago completa el cupón y los meses cuando la
    referencia los omitió, y reemplaza a la referencia si no decodifica.
    """
    intent = _compact.decode(external_reference)
    if intent is None:
        # Preferencias antiguas usaban el formato delimitado
        intent = _delimited.decode(external_reference)

    from_metadata = CompactIntentCodec.from_record(metadata) if isinstance(metadata, Mapping) else None
    if intent is None:
        if from_metadata is not None:
            logger.info("Intent reconstruido desde metadata (external_reference ausente o malformado)")
        return from_metadata

    if from_metadata is not None and (
        from_metadata.user_id == intent.user_id and from_metadata.product_id == intent.product_id
    ):
        intent = replace(
            intent,
            coupon_code=intent.coupon_code or from_metadata.coupon_code,
            coupon_id=intent.coupon_id or from_metadata.coupon_id,
            access_months=intent.access_months or from_metadata.access_months,
        )
    return intent


__all__ = ["resolve_paypal_intent", "resolve_mercadopago_intent"]

# Fin del archivo backend/app/modules/payments/codecs/resolver.py
