# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/free_enroll.py

Inscripción gratuita mediante un cupón del 100%.

Es el destino del error `free_enrollment` del checkout pagado: nunca se
crea una orden de precio cero en un proveedor.

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.base import utcnow
from app.shared.errors import InvalidState, ValidationError
from app.modules.auth.context import RequestContext
from app.modules.catalog.services import BASE_CURRENCY, CatalogService, PricingResolver
from app.modules.coupons.services import CouponValidator
from app.modules.learning.services import EnrollmentService
from app.modules.payments.enums import PaymentProvider, PaymentStatus, ProductType
from app.modules.payments.repositories import PaymentRepository
from .dto import FreeEnrollRequest, FreeEnrollResponse

logger = logging.getLogger(__name__)


async def free_enroll(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    payload: FreeEnrollRequest,
    catalog: Optional[CatalogService] = None,
    pricing: Optional[PricingResolver] = None,
    coupons: Optional[CouponValidator] = None,
    enrollments: Optional[EnrollmentService] = None,
    payment_repo: Optional[PaymentRepository] = None,
) -> FreeEnrollResponse:
    catalog = catalog or CatalogService()
    pricing = pricing or PricingResolver()
    coupons = coupons or CouponValidator()
    enrollments = enrollments or EnrollmentService()
    payment_repo = payment_repo or PaymentRepository()
    settings = get_payments_settings()

    # 1) Curso y precio base
    course = await catalog.load_course(session, payload.course_id.strip())
    base_price = await pricing.resolve(session, course, BASE_CURRENCY)

    # 2) El cupón debe dejar el precio en 0
    code = payload.coupon_code.strip().upper()
    result = await coupons.validate(
        session,
        code=code,
        product_id=course.id,
        base_price=base_price,
        currency=BASE_CURRENCY,
        user_id=ctx.user_id,
    )
    if not getattr(result, "is_free_enrollment", False):
        reason = getattr(result, "reason", None)
        logger.info("free-enroll rechazado: cupón %s no es gratuito (reason=%s)", code, reason)
        raise ValidationError("El cupón no otorga acceso gratuito", reason="coupon_not_free")

    # 3) Sin inscripción activa previa
    if await enrollments.has_active_enrollment(session, user_id=ctx.user_id, course_id=course.id):
        raise InvalidState("Ya estás inscripto en este curso", reason="already_enrolled")

    # 4-6) Pago gratuito + inscripción + uso del cupón en una sola transacción
    try:
        payment = await payment_repo.create(
            session,
            provider=PaymentProvider.FREE,
            provider_payment_id=None,
            user_id=ctx.user_id,
            organization_id=None,
            product_type=ProductType.COURSE,
            product_id=course.id,
            amount=Decimal("0"),
            currency=BASE_CURRENCY,
            status=PaymentStatus.COMPLETED,
            coupon_code=code,
            coupon_id=result.coupon_id,
            approved_at=utcnow(),
        )
        enrollment = await enrollments.enroll(
            session,
            user_id=ctx.user_id,
            course_id=course.id,
            days=settings.free_enrollment_days,
        )
        await coupons.record_redemption(
            session,
            coupon_id=result.coupon_id,
            user_id=ctx.user_id,
            course_id=course.id,
            payment_id=payment.id,
            original_price=base_price,
            final_price=Decimal("0"),
            currency=BASE_CURRENCY,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Inscripción gratuita user=%s course=%s coupon=%s", ctx.user_id, course.slug, code)
    return FreeEnrollResponse(success=True, enrollment_id=enrollment.id)


__all__ = ["free_enroll"]

# Fin del archivo backend/app/modules/payments/facades/checkout/free_enroll.py
