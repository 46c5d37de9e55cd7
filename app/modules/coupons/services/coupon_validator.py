# -*- coding: utf-8 -*-
"""
backend/app/modules/coupons/services/coupon_validator.py

Validación de cupones de descuento.

Resultados posibles:
- CouponApplication: descuento válido, 0 ≤ final_price < base_price.
- CouponRejection: el cupón no aplica (motivo legible, sin cambio de precio).
- CouponRejection(is_free_enrollment=True): el cupón deja el precio en 0.
  No es un checkout de precio cero: el llamador debe derivar al flujo de
  inscripción gratuita.

Orden de reglas: existencia → activo → vigencia → alcance → límite global
→ límite por usuario → moneda (solo descuentos fijos).

Autor: Seencel
Fecha: 2026-09-22
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import as_utc, utcnow
from app.modules.coupons.enums import DiscountType
from app.modules.coupons.models import Coupon, CouponRedemption
from app.modules.coupons.repositories import CouponRedemptionRepository, CouponRepository

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")
_HUNDRED = Decimal("100")

REJECTION_MESSAGES = {
    "not_found": "El cupón no existe",
    "inactive": "El cupón no está activo",
    "not_started": "El cupón todavía no está vigente",
    "expired": "El cupón está vencido",
    "not_applicable": "El cupón no aplica a este producto",
    "usage_limit_reached": "El cupón alcanzó su límite de usos",
    "already_used": "Ya utilizaste este cupón",
    "currency_mismatch": "El cupón no aplica a esta moneda",
    "no_discount": "El cupón no genera descuento",
    "free_enrollment": "El cupón otorga acceso gratuito",
}


@dataclass(frozen=True)
class CouponApplication:
    coupon_id: str
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: Decimal
    original_price: Decimal
    final_price: Decimal

    @property
    def descriptor(self) -> str:
        if self.discount_type == DiscountType.PERCENT:
            return f"{self.discount_value.normalize():f}%"
        return f"-{self.discount_amount}"


@dataclass(frozen=True)
class CouponRejection:
    reason: str
    code: str
    coupon_id: Optional[str] = None
    is_free_enrollment: bool = False

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES.get(self.reason, self.reason)


CouponResult = Union[CouponApplication, CouponRejection]


class CouponValidator:
    def __init__(
        self,
        coupon_repo: Optional[CouponRepository] = None,
        redemption_repo: Optional[CouponRedemptionRepository] = None,
    ) -> None:
        self.coupon_repo = coupon_repo or CouponRepository()
        self.redemption_repo = redemption_repo or CouponRedemptionRepository()

    # ------------------------------------------------------------------ #
    # Validación
    # ------------------------------------------------------------------ #
    async def validate(
        self,
        session: AsyncSession,
        *,
        code: str,
        product_id: str,
        base_price: Decimal,
        currency: str,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> CouponResult:
        normalized = (code or "").strip().upper()
        coupon = await self.coupon_repo.get_by_code(session, normalized)
        if coupon is None:
            return CouponRejection(reason="not_found", code=normalized)

        reason = await self._eligibility_error(
            session, coupon, product_id=product_id, currency=currency, user_id=user_id, now=now or utcnow()
        )
        if reason:
            logger.info("Cupón %s rechazado para user=%s: %s", normalized, user_id, reason)
            return CouponRejection(reason=reason, code=normalized, coupon_id=coupon.id)

        discount = self._discount_for(coupon, base_price)
        final_price = max(base_price - discount, Decimal("0")).quantize(_CENTS, rounding=ROUND_HALF_UP)

        if final_price <= 0:
            return CouponRejection(
                reason="free_enrollment",
                code=normalized,
                coupon_id=coupon.id,
                is_free_enrollment=True,
            )
        if discount <= 0 or final_price >= base_price:
            return CouponRejection(reason="no_discount", code=normalized, coupon_id=coupon.id)

        return CouponApplication(
            coupon_id=coupon.id,
            code=normalized,
            discount_type=coupon.discount_type,
            discount_value=Decimal(coupon.amount),
            discount_amount=(base_price - final_price).quantize(_CENTS, rounding=ROUND_HALF_UP),
            original_price=base_price,
            final_price=final_price,
        )

    async def _eligibility_error(
        self,
        session: AsyncSession,
        coupon: Coupon,
        *,
        product_id: str,
        currency: str,
        user_id: str,
        now: datetime,
    ) -> Optional[str]:
        if not coupon.is_active:
            return "inactive"

        starts_at = as_utc(coupon.starts_at)
        expires_at = as_utc(coupon.expires_at)
        if starts_at and starts_at > now:
            return "not_started"
        if expires_at and expires_at <= now:
            return "expired"

        if not coupon.applies_to_all and coupon.course_id != product_id:
            return "not_applicable"

        if coupon.max_redemptions is not None:
            used = await self.redemption_repo.count_for_coupon(session, coupon.id)
            if used >= coupon.max_redemptions:
                return "usage_limit_reached"

        if coupon.per_user_limit and coupon.per_user_limit > 0:
            used_by_user = await self.redemption_repo.count_for_user(session, coupon.id, user_id)
            if used_by_user >= coupon.per_user_limit:
                return "already_used"

        if (
            coupon.discount_type == DiscountType.FIXED
            and coupon.currency
            and coupon.currency.upper() != (currency or "").upper()
        ):
            return "currency_mismatch"

        return None

    @staticmethod
    def _discount_for(coupon: Coupon, base_price: Decimal) -> Decimal:
        value = Decimal(coupon.amount or 0)
        if value <= 0:
            return Decimal("0")
        if coupon.discount_type == DiscountType.PERCENT:
            pct = min(value, _HUNDRED)
            return (base_price * pct / _HUNDRED).quantize(_CENTS, rounding=ROUND_HALF_UP)
        return min(value, base_price)

    # ------------------------------------------------------------------ #
    # Registro de uso
    # ------------------------------------------------------------------ #
    async def record_redemption(
        self,
        session: AsyncSession,
        *,
        coupon_id: str,
        user_id: str,
        course_id: Optional[str],
        payment_id: Optional[str],
        original_price: Decimal,
        final_price: Decimal,
        currency: str,
    ) -> CouponRedemption:
        """Registra el uso del cupón. Solo tras un pago recién insertado o una inscripción gratuita."""
        redemption = await self.redemption_repo.create(
            session,
            coupon_id=coupon_id,
            user_id=user_id,
            course_id=course_id,
            payment_id=payment_id,
            original_price=original_price,
            discount_amount=max(original_price - final_price, Decimal("0")),
            final_price=final_price,
            currency=currency.upper(),
        )
        logger.info("Cupón %s redimido por user=%s (payment=%s)", coupon_id, user_id, payment_id)
        return redemption


__all__ = ["CouponApplication", "CouponRejection", "CouponValidator"]

# Fin del archivo backend/app/modules/coupons/services/coupon_validator.py
