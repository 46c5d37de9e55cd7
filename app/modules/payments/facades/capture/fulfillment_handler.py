# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/fulfillment_handler.py

Handler idempotente de captura y fulfillment.

Puede invocarse dos veces para la misma transacción (redirect del
usuario + webhook asíncrono) y también con entregas concurrentes del
mismo webhook. Contrato:

1. Registrar el evento crudo en payment_events (commit).
2. No aprobado → NOT_APPROVED.
3. Sin intent o sin provider_payment_id → METADATA_MISSING (un webhook
   posterior lo completará; no es error).
4. Pago existente con ese provider_payment_id → ALREADY_PROCESSED.
5. Insertar Payment y hacer commit ANTES del fulfillment. Una violación
   del índice único significa que otra entrega ganó → ALREADY_PROCESSED.
6. Ejecutar la acción (inscripción o upgrade de plan) y commit.
7. Si la acción falla: borrar el Payment recién insertado (compensación)
   para que la siguiente entrega reintente desde cero. Si el borrado
   también falla, log CRITICAL para conciliación manual; sin reintentos.

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import utcnow
from app.shared.errors import NotFound
from app.modules.catalog.repositories import CourseRepository
from app.modules.coupons.services import CouponValidator
from app.modules.learning.services import DEFAULT_ACCESS_MONTHS, EnrollmentService
from app.modules.organizations.services import PlanUpgradeService
from app.modules.payments.codecs import CheckoutIntent
from app.modules.payments.enums import BillingPeriod, PaymentStatus, ProductType
from app.modules.payments.metrics import observe_capture_outcome, observe_compensation
from app.modules.payments.models import Payment
from app.modules.payments.repositories import PaymentEventRepository, PaymentRepository
from .dto import CaptureOutcome, CaptureResult, IntentResolver, ProviderCapture

logger = logging.getLogger(__name__)

_HINT_LIMIT = 64


class FulfillmentHandler:
    def __init__(
        self,
        payment_repo: Optional[PaymentRepository] = None,
        event_repo: Optional[PaymentEventRepository] = None,
        course_repo: Optional[CourseRepository] = None,
        enrollments: Optional[EnrollmentService] = None,
        plan_upgrades: Optional[PlanUpgradeService] = None,
        coupons: Optional[CouponValidator] = None,
    ) -> None:
        self.payment_repo = payment_repo or PaymentRepository()
        self.event_repo = event_repo or PaymentEventRepository()
        self.course_repo = course_repo or CourseRepository()
        self.enrollments = enrollments or EnrollmentService()
        self.plan_upgrades = plan_upgrades or PlanUpgradeService()
        self.coupons = coupons or CouponValidator()

    async def process(
        self,
        session: AsyncSession,
        capture: ProviderCapture,
        codec_resolver: IntentResolver,
    ) -> CaptureResult:
        result = await self._process(session, capture, codec_resolver)
        observe_capture_outcome(capture.provider.value, result.outcome.value)
        return result

    async def _process(
        self,
        session: AsyncSession,
        capture: ProviderCapture,
        codec_resolver: IntentResolver,
    ) -> CaptureResult:
        ppid = capture.provider_payment_id
        intent = codec_resolver(capture)

        # 1) Bitácora forense
        await self._audit(session, capture, intent)

        # 2) Estado
        if not capture.approved:
            logger.info(
                "Captura %s no aprobada: payment=%s status=%s",
                capture.provider.value, ppid, capture.status,
            )
            return CaptureResult(CaptureOutcome.NOT_APPROVED, message=capture.status, provider_payment_id=ppid)

        # 3) Metadata
        if intent is None or not ppid:
            logger.info(
                "Captura %s sin metadata utilizable (payment=%s correlation=%r); se espera otra entrega",
                capture.provider.value, ppid, capture.correlation,
            )
            return CaptureResult(CaptureOutcome.METADATA_MISSING, provider_payment_id=ppid)

        # 4) Verificación previa de idempotencia
        existing = await self.payment_repo.get_by_provider_payment_id(session, ppid)
        if existing is not None:
            logger.info("Pago %s ya procesado (payment_id=%s); no-op", ppid, existing.id)
            return CaptureResult(CaptureOutcome.ALREADY_PROCESSED, payment_id=existing.id, provider_payment_id=ppid)

        # 5) Insert durable; el índice único es el árbitro final
        try:
            payment = await self._insert_payment(session, capture, intent)
            await session.commit()
        except IntegrityError:
            await session.rollback()
            logger.info("Pago %s insertado por otra entrega concurrente; no-op", ppid)
            return CaptureResult(CaptureOutcome.ALREADY_PROCESSED, provider_payment_id=ppid)

        payment_id = payment.id
        amount = payment.amount
        currency = payment.currency

        # 6) Acción de fulfillment
        try:
            await self._fulfill(session, intent, payment_id=payment_id, amount=amount, currency=currency)
            await session.commit()
        except Exception as e:
            logger.error(
                "Fulfillment falló para %s (payment_id=%s): %r; compensando",
                ppid, payment_id, e,
                exc_info=True,
            )
            await self._compensate(session, payment_id, ppid)
            return CaptureResult(
                CaptureOutcome.FAILED,
                payment_id=None,
                message="fulfillment_failed",
                provider_payment_id=ppid,
            )

        logger.info(
            "Pago %s completado: payment_id=%s user=%s %s/%s",
            ppid, payment_id, intent.user_id, intent.product_type.value, intent.product_id,
        )
        return CaptureResult(CaptureOutcome.FULFILLED, payment_id=payment_id, provider_payment_id=ppid)

    # ------------------------------------------------------------------ #
    # Pasos
    # ------------------------------------------------------------------ #
    async def _audit(
        self,
        session: AsyncSession,
        capture: ProviderCapture,
        intent: Optional[CheckoutIntent],
    ) -> None:
        await self.event_repo.create(
            session,
            provider=capture.provider,
            provider_event_id=capture.event_id,
            provider_event_type=capture.event_type,
            status=capture.status[:64] if capture.status else None,
            raw_payload=capture.raw or {},
            order_id=capture.order_id,
            custom_id=capture.correlation,
            user_hint=intent.user_id[:_HINT_LIMIT] if intent else None,
            product_hint=intent.product_id[:_HINT_LIMIT] if intent else None,
            provider_payment_id=capture.provider_payment_id,
            amount=capture.amount,
            currency=(capture.currency or "")[:3].upper() or None,
        )
        await session.commit()

    async def _insert_payment(
        self,
        session: AsyncSession,
        capture: ProviderCapture,
        intent: CheckoutIntent,
    ) -> Payment:
        amount = capture.amount if capture.amount is not None else (intent.unit_price or Decimal("0"))
        currency = (capture.currency or intent.currency or "USD").upper()
        return await self.payment_repo.create(
            session,
            provider=capture.provider,
            provider_payment_id=capture.provider_payment_id,
            user_id=intent.user_id,
            organization_id=intent.organization_id,
            product_type=intent.product_type,
            product_id=intent.product_id,
            amount=amount,
            currency=currency,
            status=PaymentStatus.COMPLETED,
            coupon_code=intent.coupon_code,
            coupon_id=intent.coupon_id,
            approved_at=utcnow(),
        )

    async def _fulfill(
        self,
        session: AsyncSession,
        intent: CheckoutIntent,
        *,
        payment_id: str,
        amount: Decimal,
        currency: str,
    ) -> None:
        if intent.product_type == ProductType.SUBSCRIPTION:
            await self.plan_upgrades.upgrade(
                session,
                organization_id=intent.organization_id,
                plan_id=intent.product_id,
                billing_period=intent.billing_period or BillingPeriod.MONTHLY,
                payment_id=payment_id,
                amount=amount,
                currency=currency,
            )
            return

        course = await self.course_repo.get(session, intent.product_id)
        if course is None:
            # Referencias legacy por slug
            course = await self.course_repo.get_active(session, intent.product_id)
        if course is None:
            raise NotFound(f"Curso {intent.product_id} no encontrado", reason="course")

        months = intent.access_months or course.access_months or DEFAULT_ACCESS_MONTHS
        await self.enrollments.enroll(session, user_id=intent.user_id, course_id=course.id, months=months)

        if intent.coupon_id:
            # Solo se llega aquí con un Payment recién insertado
            await self.coupons.record_redemption(
                session,
                coupon_id=intent.coupon_id,
                user_id=intent.user_id,
                course_id=course.id,
                payment_id=payment_id,
                original_price=amount,
                final_price=amount,
                currency=currency,
            )

    async def _compensate(self, session: AsyncSession, payment_id: str, ppid: str) -> None:
        try:
            await session.rollback()
            deleted = await self.payment_repo.delete_by_id(session, payment_id)
            await session.commit()
        except Exception as e:
            await session.rollback()
            observe_compensation("fulfillment", False)
            logger.critical(
                "reconciliation_required: no se pudo borrar el payment %s (provider_payment_id=%s) "
                "tras fallar el fulfillment: %r",
                payment_id, ppid, e,
            )
            return

        observe_compensation("fulfillment", True)
        logger.warning(
            "Compensación: payment %s (provider_payment_id=%s) %s",
            payment_id, ppid, "borrado" if deleted else "ya no existía",
        )


__all__ = ["FulfillmentHandler"]

# Fin del archivo backend/app/modules/payments/facades/capture/fulfillment_handler.py
