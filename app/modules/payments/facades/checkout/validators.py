# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/validators.py

Validadores de negocio para el flujo de checkout.

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from app.shared.errors import ValidationError
from app.modules.payments.enums import BillingPeriod, PaymentProvider, ProductType
from .dto import CheckoutRequest

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")

DEFAULT_CURRENCY = {
    PaymentProvider.MERCADOPAGO: "ARS",
    PaymentProvider.PAYPAL: "USD",
}


@dataclass(frozen=True)
class ValidatedCheckout:
    product_type: ProductType
    product_id: str
    currency: str
    billing_period: Optional[BillingPeriod]
    organization_id: Optional[str]
    coupon_code: Optional[str]


def normalize_currency(value: Optional[str], default: str) -> str:
    currency = (value or default).strip().upper()
    if not _CURRENCY_RE.match(currency):
        raise ValidationError(f"Moneda inválida: {value!r}", reason="invalid_currency")
    return currency


def validate_checkout_request(data: CheckoutRequest, provider: PaymentProvider) -> ValidatedCheckout:
    """Validaciones adicionales a las de Pydantic; errores como ValidationError (400)."""
    if provider not in DEFAULT_CURRENCY:
        raise ValidationError("Proveedor de pago no soportado", reason="unsupported_provider")

    try:
        product_type = ProductType((data.product_type or "").strip().lower())
    except ValueError:
        raise ValidationError("product_type debe ser 'course' o 'subscription'", reason="invalid_product_type")

    product_id = (data.product_id or "").strip()
    if not product_id:
        raise ValidationError("product_id es requerido", reason="missing_product")

    billing_period: Optional[BillingPeriod] = None
    organization_id = (data.organization_id or "").strip() or None
    if product_type == ProductType.SUBSCRIPTION:
        if not organization_id:
            raise ValidationError("organization_id es requerido para suscripciones", reason="missing_organization")
        try:
            billing_period = BillingPeriod((data.billing_period or "").strip().lower())
        except ValueError:
            raise ValidationError("billing_period debe ser 'monthly' o 'annual'", reason="invalid_billing_period")
    else:
        # Un curso no pertenece a una organización
        organization_id = None

    coupon_code = (data.coupon_code or "").strip().upper() or None

    return ValidatedCheckout(
        product_type=product_type,
        product_id=product_id,
        currency=normalize_currency(data.currency, DEFAULT_CURRENCY[provider]),
        billing_period=billing_period,
        organization_id=organization_id,
        coupon_code=coupon_code,
    )


__all__ = ["ValidatedCheckout", "validate_checkout_request", "normalize_currency", "DEFAULT_CURRENCY"]

# Fin del archivo backend/app/modules/payments/facades/checkout/validators.py
