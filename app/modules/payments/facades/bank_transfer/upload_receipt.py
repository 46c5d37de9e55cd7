# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/bank_transfer/upload_receipt.py

Subida del comprobante de una transferencia bancaria.

Orden:
  1. transferencia propia y pending (NotFound / InvalidState)
  2. course_id: el guardado o, si falta, vía checkout_sessions.
     Sin curso → MissingProductReference ANTES de subir nada.
  3. extensión permitida y base64 válido
  4. subida a `{transfer_id}{ext}` (upsert)
  5. Payment pending: se reutiliza si ya existe (re-subida)
  6. update final de la transferencia; si falla y el Payment se creó en
     esta llamada, se borra (si el borrado falla: log CRITICAL)

Autor: Seencel
Fecha: 2026-09-27
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.errors import (
    InvalidState,
    MissingProductReference,
    NotFound,
    ProviderUnavailable,
    ValidationError,
)
from app.shared.utils.http_storage_client import StorageUploadError
from app.modules.auth.context import RequestContext
from app.modules.catalog.repositories import CheckoutSessionRepository
from app.modules.payments.enums import BankTransferStatus, PaymentProvider, PaymentStatus, ProductType
from app.modules.payments.metrics import observe_compensation
from app.modules.payments.repositories import BankTransferRepository, PaymentRepository
from .dto import UploadReceiptRequest, UploadReceiptResponse
from .storage import ReceiptStorage

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def receipt_extension(file_name: str) -> str:
    ext = os.path.splitext(file_name.strip())[1].lower()
    if ext not in CONTENT_TYPES:
        raise ValidationError(
            f"Extensión no permitida. Usa: {', '.join(sorted(CONTENT_TYPES))}",
            reason="invalid_file_extension",
        )
    return ext


def decode_base64_payload(data: str) -> bytes:
    """Decodifica base64, aceptando el prefijo `data:<mime>;base64,`."""
    raw = data.strip()
    if raw.startswith("data:") and "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        decoded = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Archivo en base64 inválido", reason="invalid_base64") from e
    if not decoded:
        raise ValidationError("Archivo vacío", reason="empty_file")
    return decoded


async def _resolve_course_id(
    session: AsyncSession,
    transfer,
    checkout_sessions: CheckoutSessionRepository,
) -> str:
    if transfer.course_id:
        return transfer.course_id
    if transfer.order_id:
        course_id = await checkout_sessions.get_course_id(session, transfer.order_id)
        if course_id:
            logger.info("Transferencia %s: course_id %s resuelto vía checkout_session", transfer.id, course_id)
            return course_id
    raise MissingProductReference(
        "La transferencia no tiene un curso asociado", reason="missing_course_id"
    )


async def upload_receipt(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    payload: UploadReceiptRequest,
    storage: ReceiptStorage,
    transfer_repo: Optional[BankTransferRepository] = None,
    payment_repo: Optional[PaymentRepository] = None,
    checkout_sessions: Optional[CheckoutSessionRepository] = None,
) -> UploadReceiptResponse:
    transfer_repo = transfer_repo or BankTransferRepository()
    payment_repo = payment_repo or PaymentRepository()
    checkout_sessions = checkout_sessions or CheckoutSessionRepository()
    settings = get_payments_settings()

    transfer = await transfer_repo.get_owned(session, payload.transfer_id, ctx.user_id)
    if transfer is None:
        raise NotFound("Transferencia no encontrada", reason="bank_transfer")
    if transfer.status != BankTransferStatus.PENDING:
        raise InvalidState("La transferencia ya fue revisada", reason="transfer_not_pending")

    transfer_id = transfer.id
    course_id = await _resolve_course_id(session, transfer, checkout_sessions)

    ext = receipt_extension(payload.file_name)
    file_bytes = decode_base64_payload(payload.file_data_base64)

    path = f"{transfer_id}{ext}"
    try:
        await storage.upload_file(
            settings.bank_transfer_bucket,
            path,
            file_bytes,
            content_type=CONTENT_TYPES[ext],
            overwrite=True,
        )
    except StorageUploadError as e:
        raise ProviderUnavailable("No se pudo subir el comprobante", reason="storage") from e
    receipt_url = storage.get_public_url(settings.bank_transfer_bucket, path)

    created_payment_id, payment_id = await _ensure_payment(session, transfer, course_id, payment_repo)

    try:
        await transfer_repo.attach_receipt(
            session, transfer, payment_id=payment_id, receipt_url=receipt_url, course_id=course_id
        )
        await session.commit()
    except Exception:
        logger.exception("Fallo el update final de la transferencia %s", transfer_id)
        await session.rollback()
        if created_payment_id:
            await _delete_created_payment(session, payment_repo, created_payment_id, transfer_id)
        raise

    logger.info("Comprobante subido transfer=%s payment=%s", transfer_id, payment_id)
    return UploadReceiptResponse(success=True, receipt_url=receipt_url)


async def _ensure_payment(
    session: AsyncSession,
    transfer,
    course_id: str,
    payment_repo: PaymentRepository,
) -> Tuple[Optional[str], str]:
    """(id creado en esta llamada o None, id del payment vinculado)."""
    if transfer.payment_id:
        return None, transfer.payment_id

    payment = await payment_repo.create(
        session,
        provider=PaymentProvider.BANK_TRANSFER,
        provider_payment_id=None,
        user_id=transfer.user_id,
        organization_id=None,
        product_type=ProductType.COURSE,
        product_id=course_id,
        amount=transfer.amount,
        currency=transfer.currency,
        status=PaymentStatus.PENDING,
    )
    await session.commit()
    return payment.id, payment.id


async def _delete_created_payment(
    session: AsyncSession,
    payment_repo: PaymentRepository,
    payment_id: str,
    transfer_id: str,
) -> None:
    try:
        await payment_repo.delete_by_id(session, payment_id)
        await session.commit()
        observe_compensation("bank_transfer_payment", True)
    except Exception:
        await session.rollback()
        observe_compensation("bank_transfer_payment", False)
        logger.critical(
            "reconciliation_required: payment %s huérfano (transfer=%s)",
            payment_id,
            transfer_id,
            exc_info=True,
        )


__all__ = ["upload_receipt", "receipt_extension", "decode_base64_payload", "CONTENT_TYPES"]

# Fin del archivo backend/app/modules/payments/facades/bank_transfer/upload_receipt.py
