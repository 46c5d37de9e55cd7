# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/delimited.py

Codificación delimitada para el `custom_id` de PayPal:

    user_id|product_id|organization_id|billing_period

ASCII, orden fijo, sin escape del separador. En cursos los dos últimos
campos quedan vacíos. Un string malformado decodifica a None (la captura
continúa sin intent), nunca lanza.

Autor: Seencel
Fecha: 2026-09-23
"""

from __future__ import annotations

import logging
from typing import Optional

from app.shared.errors import MetadataTooLong, ValidationError
from app.modules.payments.enums import BillingPeriod, ProductType
from .intent import DEFAULT_MAX_LENGTH, CheckoutIntent

logger = logging.getLogger(__name__)

SEPARATOR = "|"
FIELD_COUNT = 4


class DelimitedIntentCodec:
    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.max_length = max_length

    def encode(self, intent: CheckoutIntent) -> str:
        fields = [
            intent.user_id,
            intent.product_id,
            intent.organization_id or "",
            intent.billing_period.value if intent.billing_period else "",
        ]
        for value in fields:
            if SEPARATOR in value:
                raise ValidationError(
                    f"El valor '{value}' contiene el separador '{SEPARATOR}'",
                    reason="invalid_metadata_value",
                )
        if intent.is_subscription and not (fields[2] and fields[3]):
            raise ValidationError(
                "Una suscripción requiere organization_id y billing_period",
                reason="invalid_metadata_value",
            )

        encoded = SEPARATOR.join(fields)
        if len(encoded) > self.max_length:
            raise MetadataTooLong(
                f"custom_id de {len(encoded)} caracteres excede el máximo de {self.max_length}"
            )
        return encoded

    def decode(self, raw: Optional[str]) -> Optional[CheckoutIntent]:
        if not raw or not isinstance(raw, str):
            return None

        parts = raw.split(SEPARATOR)
        if len(parts) != FIELD_COUNT:
            return None

        user_id, product_id, organization_id, period = (p.strip() for p in parts)
        if not user_id or not product_id:
            return None

        if organization_id and period in (BillingPeriod.MONTHLY.value, BillingPeriod.ANNUAL.value):
            return CheckoutIntent(
                user_id=user_id,
                product_type=ProductType.SUBSCRIPTION,
                product_id=product_id,
                organization_id=organization_id,
                billing_period=BillingPeriod(period),
            )
        if not organization_id and not period:
            return CheckoutIntent(
                user_id=user_id,
                product_type=ProductType.COURSE,
                product_id=product_id,
            )

        logger.debug("custom_id con forma desconocida: org=%r period=%r", organization_id, period)
        return None


__all__ = ["DelimitedIntentCodec", "SEPARATOR"]

# Fin del archivo backend/app/modules/payments/codecs/delimited.py
