# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/bank_transfers.py

Rutas de transferencias bancarias.

Endpoints:
- POST /payments/bank-transfers
- POST /payments/bank-transfers/receipt
- GET  /payments/bank-transfers/{transfer_id}
- POST /payments/bank-transfers/{transfer_id}/approve
- POST /payments/bank-transfers/{transfer_id}/reject

Autor: Seencel
Fecha: 2026-09-28
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.database import get_async_session
from app.modules.auth.context import RequestContext
from app.modules.auth.dependencies import get_request_context
from app.modules.payments.facades.bank_transfer import (
    BankTransferOut,
    CreateTransferRequest,
    ReceiptStorage,
    UploadReceiptRequest,
    UploadReceiptResponse,
    create_transfer,
    get_receipt_storage,
    get_transfer,
    review_transfer,
    upload_receipt,
)

router = APIRouter(
    prefix="/bank-transfers",
    tags=["payments:bank-transfers"],
)


@router.post(
    "",
    response_model=BankTransferOut,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_bank_transfer(
    payload: CreateTransferRequest,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
) -> BankTransferOut:
    transfer = await create_transfer(session, ctx=ctx, payload=payload)
    return BankTransferOut.model_validate(transfer)


# Declarada antes de /{transfer_id} para que "receipt" no se tome como id
@router.post(
    "/receipt",
    response_model=UploadReceiptResponse,
    response_model_by_alias=True,
)
async def upload_bank_transfer_receipt(
    payload: UploadReceiptRequest,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
    storage: ReceiptStorage = Depends(get_receipt_storage),
) -> UploadReceiptResponse:
    """Sube el comprobante y deja el pago pendiente de revisión."""
    return await upload_receipt(session, ctx=ctx, payload=payload, storage=storage)


@router.get(
    "/{transfer_id}",
    response_model=BankTransferOut,
    response_model_by_alias=True,
)
async def get_bank_transfer(
    transfer_id: str,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
) -> BankTransferOut:
    transfer = await get_transfer(session, ctx=ctx, transfer_id=transfer_id)
    return BankTransferOut.model_validate(transfer)


@router.post(
    "/{transfer_id}/approve",
    response_model=BankTransferOut,
    response_model_by_alias=True,
)
async def approve_bank_transfer(
    transfer_id: str,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
) -> BankTransferOut:
    transfer = await review_transfer(session, ctx=ctx, transfer_id=transfer_id, approve=True)
    return BankTransferOut.model_validate(transfer)


@router.post(
    "/{transfer_id}/reject",
    response_model=BankTransferOut,
    response_model_by_alias=True,
)
async def reject_bank_transfer(
    transfer_id: str,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
) -> BankTransferOut:
    transfer = await review_transfer(session, ctx=ctx, transfer_id=transfer_id, approve=False)
    return BankTransferOut.model_validate(transfer)


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/bank_transfers.py
