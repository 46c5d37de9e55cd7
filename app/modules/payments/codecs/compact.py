# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/compact.py

Codificación compacta para el `external_reference` de MercadoPago.

Un registro JSON de claves cortas {u,t,p,o?,bp?,m?,cpn?,cid?} serializado
sin espacios y codificado en base64 URL-safe sin padding.

Si excede el máximo se descartan primero los datos del cupón y luego
`m`; si aun así no cabe se lanza MetadataTooLong (nunca se trunca).

La decodificación es tolerante: acepta padding, alfabeto estándar,
claves largas legacy y los tipos abreviados c/s. Cualquier error de
forma devuelve None. `from_record` aplica las mismas reglas a un dict
ya decodificado (p. ej. el `metadata` de un pago de MercadoPago).

Autor: Seencel
Fecha: 2026-09-23
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, Mapping, Optional

from app.shared.errors import MetadataTooLong
from app.modules.payments.enums import BillingPeriod, ProductType
from .intent import DEFAULT_MAX_LENGTH, CheckoutIntent

logger = logging.getLogger(__name__)

_TYPE_SHORT = {ProductType.COURSE: "c", ProductType.SUBSCRIPTION: "s"}
_TYPE_FROM_RAW = {
    "c": ProductType.COURSE,
    "course": ProductType.COURSE,
    "s": ProductType.SUBSCRIPTION,
    "subscription": ProductType.SUBSCRIPTION,
}

# Claves largas que usaban las referencias anteriores
_LEGACY_KEYS = {
    "user_id": "u",
    "product_type": "t",
    "organization_id": "o",
    "billing_period": "bp",
    "months": "m",
    "access_months": "m",
    "coupon_code": "cpn",
    "coupon_id": "cid",
}
_LEGACY_PRODUCT_KEYS = ("product_id", "course_id", "course_slug", "plan_id")

# Orden de descarte cuando el resultado excede el máximo
_OPTIONAL_DROP_ORDER = (("cpn", "cid"), ("m",))


def _b64encode(payload: Dict[str, Any]) -> str:
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=True).encode("ascii")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(value: str) -> bytes:
    normalized = value.strip().replace("+", "-").replace("/", "_")
    normalized += "=" * (-len(normalized) % 4)
    return base64.urlsafe_b64decode(normalized.encode("ascii"))


class CompactIntentCodec:
    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.max_length = max_length

    # ------------------------------------------------------------------ #
    # Encode
    # ------------------------------------------------------------------ #
    def encode(self, intent: CheckoutIntent) -> str:
        payload: Dict[str, Any] = {
            "u": intent.user_id,
            "t": _TYPE_SHORT[ProductType(intent.product_type)],
            "p": intent.product_id,
        }
        if intent.organization_id:
            payload["o"] = intent.organization_id
        if intent.billing_period:
            payload["bp"] = BillingPeriod(intent.billing_period).value
        if intent.access_months:
            payload["m"] = int(intent.access_months)
        if intent.coupon_code:
            payload["cpn"] = intent.coupon_code
        if intent.coupon_id:
            payload["cid"] = intent.coupon_id

        encoded = _b64encode(payload)
        for keys in _OPTIONAL_DROP_ORDER:
            if len(encoded) <= self.max_length:
                break
            if not any(k in payload for k in keys):
                continue
            for k in keys:
                payload.pop(k, None)
            logger.warning(
                "external_reference excede %d caracteres; se omiten %s",
                self.max_length, ",".join(keys),
            )
            encoded = _b64encode(payload)

        if len(encoded) > self.max_length:
            raise MetadataTooLong(
                f"external_reference de {len(encoded)} caracteres excede el máximo de {self.max_length}"
            )
        return encoded

    # ------------------------------------------------------------------ #
    # Decode
    # ------------------------------------------------------------------ #
    def decode(self, raw: Optional[str]) -> Optional[CheckoutIntent]:
        if not raw or not isinstance(raw, str):
            return None
        try:
            data = json.loads(_b64decode(raw).decode("utf-8"))
        except (binascii.Error, ValueError, UnicodeError):
            return None
        if not isinstance(data, dict):
            return None
        return self.from_record(data)

    @staticmethod
    def from_record(data: Mapping[str, Any]) -> Optional[CheckoutIntent]:
        record: Dict[str, Any] = dict(data)
        for long_key, short_key in _LEGACY_KEYS.items():
            if long_key in record and short_key not in record:
                record[short_key] = record[long_key]
        if "p" not in record:
            for key in _LEGACY_PRODUCT_KEYS:
                if record.get(key):
                    record["p"] = record[key]
                    break

        user_id = record.get("u")
        product_id = record.get("p")
        product_type = _TYPE_FROM_RAW.get(str(record.get("t", "")).strip().lower())
        if not user_id or not product_id or product_type is None:
            return None

        organization_id = record.get("o") or None
        billing_period: Optional[BillingPeriod] = None
        if record.get("bp"):
            try:
                billing_period = BillingPeriod(str(record["bp"]).lower())
            except ValueError:
                return None

        if product_type == ProductType.SUBSCRIPTION and not (organization_id and billing_period):
            return None

        months: Optional[int] = None
        if record.get("m") not in (None, ""):
            try:
                months = int(record["m"])
            except (TypeError, ValueError):
                months = None

        return CheckoutIntent(
            user_id=str(user_id),
            product_type=product_type,
            product_id=str(product_id),
            organization_id=str(organization_id) if organization_id else None,
            billing_period=billing_period,
            coupon_code=record.get("cpn") or None,
            coupon_id=record.get("cid") or None,
            access_months=months if months and months > 0 else None,
        )


__all__ = ["CompactIntentCodec"]

# Fin del archivo backend/app/modules/payments/codecs/compact.py
