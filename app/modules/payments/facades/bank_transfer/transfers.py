# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/bank_transfer/transfers.py

Alta, consulta y revisión de transferencias bancarias.

La revisión la hacen administradores de la organización plataforma.
Aprobar completa el Payment e inscribe al usuario en la misma
transacción; si la inscripción falla se hace rollback y la transferencia
queda pending.

Autor: Seencel
Fecha: 2026-09-27
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.base import utcnow
from app.shared.errors import InvalidState, NotFound
from app.modules.auth.context import RequestContext
from app.modules.auth.services import AuthorizationGate
from app.modules.catalog.services import CatalogService
from app.modules.learning.services import EnrollmentService
from app.modules.payments.enums import BankTransferStatus, PaymentStatus
from app.modules.payments.facades.checkout.validators import normalize_currency
from app.modules.payments.models import BankTransferPayment
from app.modules.payments.repositories import BankTransferRepository, PaymentRepository
from .dto import CreateTransferRequest

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


async def create_transfer(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    payload: CreateTransferRequest,
    catalog: Optional[CatalogService] = None,
    transfer_repo: Optional[BankTransferRepository] = None,
) -> BankTransferPayment:
    catalog = catalog or CatalogService()
    transfer_repo = transfer_repo or BankTransferRepository()
    settings = get_payments_settings()

    course = await catalog.load_course(session, payload.course_id.strip())
    currency = normalize_currency(payload.currency, payload.currency)

    pct = Decimal(settings.bank_transfer_discount_percent)
    discount_amount = (payload.amount * pct / Decimal(100)).quantize(_CENTS, rounding=ROUND_HALF_UP)

    try:
        transfer = await transfer_repo.create(
            session,
            order_id=payload.order_id,
            user_id=ctx.user_id,
            course_id=course.id,
            amount=payload.amount,
            currency=currency,
            payer_name=payload.payer_name,
            payer_note=payload.payer_note,
            discount_percent=pct,
            discount_amount=discount_amount,
            status=BankTransferStatus.PENDING,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Transferencia creada id=%s user=%s course=%s", transfer.id, ctx.user_id, course.slug)
    return transfer


async def get_transfer(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    transfer_id: str,
    transfer_repo: Optional[BankTransferRepository] = None,
) -> BankTransferPayment:
    transfer_repo = transfer_repo or BankTransferRepository()
    transfer = await transfer_repo.get_owned(session, transfer_id, ctx.user_id)
    if transfer is None:
        raise NotFound("Transferencia no encontrada", reason="bank_transfer")
    return transfer


async def review_transfer(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    transfer_id: str,
    approve: bool,
    gate: Optional[AuthorizationGate] = None,
    transfer_repo: Optional[BankTransferRepository] = None,
    payment_repo: Optional[PaymentRepository] = None,
    catalog: Optional[CatalogService] = None,
    enrollments: Optional[EnrollmentService] = None,
) -> BankTransferPayment:
    gate = gate or AuthorizationGate()
    transfer_repo = transfer_repo or BankTransferRepository()
    payment_repo = payment_repo or PaymentRepository()
    catalog = catalog or CatalogService()
    enrollments = enrollments or EnrollmentService()

    await gate.require_platform_admin(session, ctx)

    transfer = await transfer_repo.get(session, transfer_id)
    if transfer is None:
        raise NotFound("Transferencia no encontrada", reason="bank_transfer")
    if transfer.status != BankTransferStatus.PENDING:
        raise InvalidState("La transferencia ya fue revisada", reason="transfer_not_pending")
    if not transfer.payment_id:
        raise InvalidState("La transferencia no tiene comprobante", reason="missing_receipt")

    payment = await payment_repo.get(session, transfer.payment_id)
    if payment is None:
        raise InvalidState("El pago asociado no existe", reason="missing_payment")

    now = utcnow()
    try:
        transfer.reviewed_by = ctx.user_id
        transfer.reviewed_at = now
        if approve:
            if not transfer.course_id:
                raise InvalidState("La transferencia no tiene curso", reason="missing_course_id")
            course = await catalog.load_course(session, transfer.course_id)
            transfer.status = BankTransferStatus.APPROVED
            payment.status = PaymentStatus.COMPLETED
            payment.approved_at = now
            await enrollments.enroll(
                session,
                user_id=transfer.user_id,
                course_id=course.id,
                months=course.access_months,
                now=now,
            )
        else:
            transfer.status = BankTransferStatus.REJECTED
            payment.status = PaymentStatus.REJECTED
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Revisión de transferencia %s revertida", transfer_id)
        raise

    logger.info(
        "Transferencia %s %s por %s",
        transfer_id, "aprobada" if approve else "rechazada", ctx.user_id,
    )
    return transfer


__all__ = ["create_transfer", "get_transfer", "review_transfer"]

# Fin del archivo backend/app/modules/payments/facades/bank_transfer/transfers.py
