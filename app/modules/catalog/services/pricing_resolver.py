# -*- coding: utf-8 -*-
"""
backend/app/modules/catalog/services/pricing_resolver.py

Resolución del precio unitario de un producto en la moneda del checkout.

Flujo:
1. Precio base en USD (curso, o plan según periodo de facturación).
2. Si la moneda destino ≠ USD, conversión con el tipo de cambio activo.

Falla cerrado: nunca devuelve un precio no finito o ≤ 0.

Autor: Seencel
Fecha: 2026-09-22
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.errors import ExchangeRateUnavailable, InvalidPrice
from app.modules.catalog.repositories import ExchangeRateRepository
from app.modules.catalog.services.products import CourseProduct, PlanProduct, ProductRef
from app.modules.payments.enums import BillingPeriod

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"
_CENTS = Decimal("0.01")


def _positive_decimal(value: Any) -> Optional[Decimal]:
    """Convierte a Decimal finito y > 0; None en cualquier otro caso."""
    if value is None or isinstance(value, bool):
        return None
    try:
        dec = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not dec.is_finite() or dec <= 0:
        return None
    return dec


class PricingResolver:
    def __init__(self, rate_repo: Optional[ExchangeRateRepository] = None) -> None:
        self.rate_repo = rate_repo or ExchangeRateRepository()

    def base_price(
        self,
        product: ProductRef,
        billing_period: Optional[BillingPeriod] = None,
    ) -> Decimal:
        """Precio base en USD validado."""
        if isinstance(product, PlanProduct):
            raw = product.amount_for(billing_period or BillingPeriod.MONTHLY)
        elif isinstance(product, CourseProduct):
            raw = product.base_price_usd
        else:
            raise InvalidPrice("Producto desconocido")

        price = _positive_decimal(raw)
        if price is None:
            logger.error("Precio inválido en catálogo: product=%s raw=%r", product.id, raw)
            raise InvalidPrice(f"Precio inválido para {product.slug}", reason="invalid_price")
        return price

    async def resolve(
        self,
        session: AsyncSession,
        product: ProductRef,
        currency: str,
        billing_period: Optional[BillingPeriod] = None,
    ) -> Decimal:
        """Precio unitario positivo en `currency`, redondeado a centavos."""
        base = self.base_price(product, billing_period)
        target = (currency or BASE_CURRENCY).upper()
        if target == BASE_CURRENCY:
            return base.quantize(_CENTS, rounding=ROUND_HALF_UP)

        raw_rate = await self.rate_repo.get_active_rate(session, BASE_CURRENCY, target)
        rate = _positive_decimal(raw_rate)
        if rate is None:
            logger.error("Sin tipo de cambio activo %s→%s (raw=%r)", BASE_CURRENCY, target, raw_rate)
            raise ExchangeRateUnavailable(
                f"No hay tipo de cambio activo {BASE_CURRENCY}→{target}",
                reason="exchange_rate_unavailable",
            )

        converted = (base * rate).quantize(_CENTS, rounding=ROUND_HALF_UP)
        if converted <= 0:
            raise InvalidPrice("El precio convertido no es positivo", reason="invalid_price")

        logger.debug("Precio %s %s → %s %s (rate=%s)", base, BASE_CURRENCY, converted, target, rate)
        return converted


__all__ = ["PricingResolver", "BASE_CURRENCY"]

# Fin del archivo backend/app/modules/catalog/services/pricing_resolver.py
