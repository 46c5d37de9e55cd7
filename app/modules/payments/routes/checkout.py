# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/checkout.py

Rutas de inicio de checkout.

Endpoints:
- POST /payments/checkout/mercadopago
- POST /payments/checkout/paypal
- POST /payments/checkout/free-enroll

El comprador es siempre el usuario de la sesión (Bearer); cualquier
`user_id` del body se ignora.

Autor: Seencel
Fecha: 2026-09-28
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.database import get_async_session
from app.modules.auth.context import RequestContext
from app.modules.auth.dependencies import get_request_context
from app.modules.payments.enums import PaymentProvider
from app.modules.payments.facades.checkout import (
    CheckoutRequest,
    CheckoutResponse,
    FreeEnrollRequest,
    FreeEnrollResponse,
    free_enroll,
    start_checkout,
)
from app.modules.payments.providers import (
    MercadoPagoClient,
    PayPalClient,
    get_mercadopago_client,
    get_paypal_client,
)

router = APIRouter(
    prefix="/checkout",
    tags=["payments:checkout"],
)


@router.post(
    "/mercadopago",
    response_model=CheckoutResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
async def checkout_mercadopago(
    payload: CheckoutRequest,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
    client: MercadoPagoClient = Depends(get_mercadopago_client),
) -> CheckoutResponse:
    """Crea una preferencia de MercadoPago y devuelve la URL de pago."""
    return await start_checkout(
        session,
        ctx=ctx,
        provider=PaymentProvider.MERCADOPAGO,
        payload=payload,
        mp_client=client,
    )


@router.post(
    "/paypal",
    response_model=CheckoutResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
async def checkout_paypal(
    payload: CheckoutRequest,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
    client: PayPalClient = Depends(get_paypal_client),
) -> CheckoutResponse:
    """Crea una orden PayPal (intent CAPTURE) y devuelve el link de aprobación."""
    return await start_checkout(
        session,
        ctx=ctx,
        provider=PaymentProvider.PAYPAL,
        payload=payload,
        paypal_client=client,
    )


@router.post(
    "/free-enroll",
    response_model=FreeEnrollResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
async def checkout_free_enroll(
    payload: FreeEnrollRequest,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_async_session),
) -> FreeEnrollResponse:
    return await free_enroll(session, ctx=ctx, payload=payload)


__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/checkout.py
