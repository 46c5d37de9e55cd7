# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/codecs/intent.py

CheckoutIntent: qué se compra y quién lo compra.

Nunca se persiste como entidad propia: se codifica en el campo de
correlación del proveedor al crear el checkout y se reconstruye al
capturar. `user_id` siempre proviene de la sesión autenticada.

Autor: Seencel
Fecha: 2026-09-23
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol

from app.modules.payments.enums import BillingPeriod, ProductType

# Límite observado en custom_id (PayPal) y external_reference (MercadoPago)
DEFAULT_MAX_LENGTH = 127


@dataclass(frozen=True)
class CheckoutIntent:
    user_id: str
    product_type: ProductType
    product_id: str
    organization_id: Optional[str] = None
    billing_period: Optional[BillingPeriod] = None
    coupon_code: Optional[str] = None
    coupon_id: Optional[str] = None
    access_months: Optional[int] = None
    currency: Optional[str] = None
    unit_price: Optional[Decimal] = None

    @property
    def is_subscription(self) -> bool:
        return self.product_type == ProductType.SUBSCRIPTION

    def as_metadata(self) -> Dict[str, Any]:
        """Dict plano (sin nulos) para campos `metadata` libres del proveedor."""
        data = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if isinstance(value, Decimal):
                value = str(value)
            elif hasattr(value, "value"):
                value = value.value
            data[key] = value
        return data


class IntentCodec(Protocol):
    def encode(self, intent: CheckoutIntent) -> str: ...

    def decode(self, raw: Optional[str]) -> Optional[CheckoutIntent]: ...


__all__ = ["CheckoutIntent", "IntentCodec", "DEFAULT_MAX_LENGTH"]

# Fin del archivo backend/app/modules/payments/codecs/intent.py
