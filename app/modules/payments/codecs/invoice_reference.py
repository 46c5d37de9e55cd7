# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/invoice_reference.py

Referencia `k:v;k:v` para el `invoice_id` de PayPal.

Claves: u, t, p, o, bp, cpn, cid, ts. `ts` (epoch en segundos) mantiene
único el invoice_id, que PayPal exige no repetido. Se usa para llevar el
cupón junto al custom_id delimitado y como respaldo completo cuando el
custom_id falta o está malformado.

Con ids UUID la forma completa excede el máximo; entonces se emite solo
`cpn;cid;ts` (la identidad viaja en el custom_id). El id del cupón nunca
se descarta: sin él no se registra la redención.

Autor: Seencel
Fecha: 2026-09-23
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from app.shared.errors import MetadataTooLong
from app.modules.payments.enums import BillingPeriod, ProductType
from .intent import DEFAULT_MAX_LENGTH, CheckoutIntent

logger = logging.getLogger(__name__)

_PAIR_SEP = ";"
_KV_SEP = ":"
_TYPES = {"c": ProductType.COURSE, "course": ProductType.COURSE,
          "s": ProductType.SUBSCRIPTION, "subscription": ProductType.SUBSCRIPTION}


class InvoiceReferenceCodec:
    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH, clock=time.time) -> None:
        self.max_length = max_length
        self._clock = clock

    def encode(self, intent: CheckoutIntent) -> str:
        ts = ("ts", str(int(self._clock())))
        coupon = [("cpn", intent.coupon_code), ("cid", intent.coupon_id)]
        identity = [
            ("u", intent.user_id),
            ("t", "s" if intent.is_subscription else "c"),
            ("p", intent.product_id),
            ("o", intent.organization_id),
            ("bp", intent.billing_period.value if intent.billing_period else None),
        ]
        encoded = self._join(identity + coupon + [ts])
        if len(encoded) > self.max_length:
            # el custom_id ya lleva u/p/o/bp; se conservan cupón y ts
            logger.info(
                "invoice_id de %d caracteres; se emite solo cupón y timestamp", len(encoded)
            )
            encoded = self._join(coupon + [ts])
        if len(encoded) > self.max_length:
            raise MetadataTooLong(
                f"invoice_id de {len(encoded)} caracteres excede el máximo de {self.max_length}"
            )
        return encoded

    @staticmethod
    def _join(pairs) -> str:
        return _PAIR_SEP.join(f"{k}{_KV_SEP}{v}" for k, v in pairs if v)

    @staticmethod
    def parse(raw: Optional[str]) -> Dict[str, str]:
        values: Dict[str, str] = {}
        if not raw or not isinstance(raw, str):
            return values
        for chunk in raw.split(_PAIR_SEP):
            key, sep, value = chunk.partition(_KV_SEP)
            if sep and key.strip() and value.strip():
                values[key.strip()] = value.strip()
        return values

    def decode(self, raw: Optional[str]) -> Optional[CheckoutIntent]:
        values = self.parse(raw)
        user_id = values.get("u")
        product_id = values.get("p")
        product_type = _TYPES.get(values.get("t", "").lower())
        if not user_id or not product_id or product_type is None:
            return None

        billing_period: Optional[BillingPeriod] = None
        if values.get("bp"):
            try:
                billing_period = BillingPeriod(values["bp"].lower())
            except ValueError:
                return None
        organization_id = values.get("o")
        if product_type == ProductType.SUBSCRIPTION and not (organization_id and billing_period):
            return None

        return CheckoutIntent(
            user_id=user_id,
            product_type=product_type,
            product_id=product_id,
            organization_id=organization_id,
            billing_period=billing_period,
            coupon_code=values.get("cpn"),
            coupon_id=values.get("cid"),
        )


__all__ = ["InvoiceReferenceCodec"]

# Fin del archivo backend/app/modules/payments/codecs/invoice_reference.py
