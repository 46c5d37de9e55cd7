# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/start_checkout.py

Fachada de alto nivel para iniciar un checkout con MercadoPago o PayPal.

Orquesta:
1. Validación del payload
2. Identidad desde la sesión (el user_id del body se ignora)
3. Carga del producto y, en suscripciones, verificación de admin de la org
4. Precio vía PricingResolver
5. Cupón vía CouponValidator (el cupón gratuito corta el flujo pagado)
6. CheckoutIntent codificado para el proveedor
7-8. Payload del proveedor y creación de la orden/preferencia
9. {redirect_url, order_id}

No persiste nada: un checkout abandonado no deja residuos.

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.errors import CouponRejected, FreeEnrollmentRequired, PaymentsError, ValidationError
from app.modules.auth.context import RequestContext
from app.modules.auth.services import AuthorizationGate
from app.modules.catalog.services import CatalogService, CourseProduct, PricingResolver, ProductRef
from app.modules.coupons.services import CouponApplication, CouponValidator
from app.modules.payments.codecs import CheckoutIntent
from app.modules.payments.enums import PaymentProvider, ProductType
from app.modules.payments.metrics import increment_checkout, observe_checkout_failed
from app.modules.payments.providers.mercadopago_client import MercadoPagoClient
from app.modules.payments.providers.paypal_client import PayPalClient
from .dto import CheckoutRequest, CheckoutResponse, ProviderCheckoutHandle
from .mercadopago_builder import MercadoPagoPreferenceBuilder
from .paypal_builder import PayPalOrderBuilder
from .validators import ValidatedCheckout, validate_checkout_request

logger = logging.getLogger(__name__)


async def start_checkout(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    provider: PaymentProvider,
    payload: CheckoutRequest,
    mp_client: Optional[MercadoPagoClient] = None,
    paypal_client: Optional[PayPalClient] = None,
    catalog: Optional[CatalogService] = None,
    pricing: Optional[PricingResolver] = None,
    coupons: Optional[CouponValidator] = None,
    gate: Optional[AuthorizationGate] = None,
) -> CheckoutResponse:
    """
    Crea la orden/preferencia en el proveedor y devuelve la URL de pago.

    Raises:
        FreeEnrollmentRequired: el cupón otorga acceso gratuito.
        CouponRejected: el cupón no aplica.
        ProviderError / ProviderUnavailable: fallo del proveedor.
    """
    provider = PaymentProvider(provider)
    currency_label = (payload.currency or "default").upper()
    increment_checkout(provider.value, currency_label)

    try:
        handle = await _start_checkout(
            session,
            ctx=ctx,
            provider=provider,
            payload=payload,
            mp_client=mp_client,
            paypal_client=paypal_client,
            catalog=catalog or CatalogService(),
            pricing=pricing or PricingResolver(),
            coupons=coupons or CouponValidator(),
            gate=gate or AuthorizationGate(),
        )
    except PaymentsError as e:
        observe_checkout_failed(provider.value, e.error)
        raise

    return CheckoutResponse(redirect_url=handle.redirect_url, order_id=handle.order_id)


async def _start_checkout(
    session: AsyncSession,
    *,
    ctx: RequestContext,
    provider: PaymentProvider,
    payload: CheckoutRequest,
    mp_client: Optional[MercadoPagoClient],
    paypal_client: Optional[PayPalClient],
    catalog: CatalogService,
    pricing: PricingResolver,
    coupons: CouponValidator,
    gate: AuthorizationGate,
) -> ProviderCheckoutHandle:
    # 1) Validaciones de negocio
    data: ValidatedCheckout = validate_checkout_request(payload, provider)

    # 2) Identidad: siempre la de la sesión
    if payload.user_id and payload.user_id != ctx.user_id:
        logger.warning("checkout: user_id del body ignorado (body=%s sesión=%s)", payload.user_id, ctx.user_id)

    # 3) Producto + autorización de organización
    product: ProductRef
    if data.product_type == ProductType.SUBSCRIPTION:
        product = await catalog.load_plan(session, data.product_id)
        await gate.require_org_admin(session, ctx, data.organization_id)
    else:
        product = await catalog.load_course(session, data.product_id)

    # 4) Precio
    unit_price: Decimal = await pricing.resolve(session, product, data.currency, data.billing_period)

    # 5) Cupón (solo cursos)
    application: Optional[CouponApplication] = None
    if data.coupon_code:
        if data.product_type != ProductType.COURSE:
            raise ValidationError("Los cupones aplican solo a cursos", reason="coupon_not_supported")
        result = await coupons.validate(
            session,
            code=data.coupon_code,
            product_id=product.id,
            base_price=unit_price,
            currency=data.currency,
            user_id=ctx.user_id,
        )
        if not isinstance(result, CouponApplication):
            if result.is_free_enrollment:
                logger.info("checkout: cupón %s otorga acceso gratuito; se corta el flujo pagado", result.code)
                raise FreeEnrollmentRequired(coupon_code=result.code)
            raise CouponRejected(result.message, reason=result.reason)
        application = result
        unit_price = application.final_price

    # 6) Intent
    intent = CheckoutIntent(
        user_id=ctx.user_id,
        product_type=data.product_type,
        product_id=product.id,
        organization_id=data.organization_id,
        billing_period=data.billing_period,
        coupon_code=application.code if application else None,
        coupon_id=application.coupon_id if application else None,
        access_months=product.access_months if isinstance(product, CourseProduct) else None,
        currency=data.currency,
        unit_price=unit_price,
    )

    # 7-8) Payload + creación en el proveedor
    if provider == PaymentProvider.MERCADOPAGO:
        mp_builder = MercadoPagoPreferenceBuilder()
        mp_payload = mp_builder.build(
            intent=intent, product=product, unit_price=unit_price, currency=data.currency, payer=ctx
        )
        handle = await mp_builder.create(mp_client or MercadoPagoClient(), mp_payload)
    else:
        pp_builder = PayPalOrderBuilder()
        pp_payload = pp_builder.build(intent=intent, product=product, unit_price=unit_price, currency=data.currency)
        handle = await pp_builder.create(paypal_client or PayPalClient(), pp_payload)

    # 9) Handle para el frontend
    logger.info(
        "checkout %s creado: order=%s user=%s product=%s/%s price=%s %s coupon=%s",
        provider.value, handle.order_id, ctx.user_id, data.product_type.value, product.slug,
        unit_price, data.currency, intent.coupon_code,
    )
    return handle


__all__ = ["start_checkout"]

# Fin del archivo backend/app/modules/payments/facades/checkout/start_checkout.py
