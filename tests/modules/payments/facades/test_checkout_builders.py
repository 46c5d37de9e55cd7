# backend/tests/modules/payments/facades/test_checkout_builders.py
"""
Payloads de MercadoPago y PayPal con ids UUID reales (36 caracteres):
los campos de correlación respetan su máximo y el intent se reconstruye
completo al capturar, con y sin cupón.
"""

from dataclasses import replace
from decimal import Decimal
from uuid import uuid4

import pytest

from app.modules.auth.context import RequestContext
from app.modules.catalog.services.products import CourseProduct, PlanProduct
from app.modules.payments.codecs import (
    CheckoutIntent,
    InvoiceReferenceCodec,
    resolve_mercadopago_intent,
    resolve_paypal_intent,
)
from app.modules.payments.enums import BillingPeriod, ProductType
from app.modules.payments.facades.checkout import MercadoPagoPreferenceBuilder, PayPalOrderBuilder

USER_ID = str(uuid4())
COURSE_ID = str(uuid4())
PLAN_ID = str(uuid4())
ORG_ID = str(uuid4())
COUPON_ID = str(uuid4())

COURSE = CourseProduct(
    id=COURSE_ID, slug="curso-revit-avanzado", title="Curso de Revit Avanzado", base_price_usd=Decimal("100")
)
PLAN = PlanProduct(
    id=PLAN_ID, slug="pro", name="Plan Pro", monthly_amount_usd=Decimal("20"), annual_amount_usd=Decimal("200")
)
PAYER = RequestContext(auth_id=str(uuid4()), user_id=USER_ID, email="ana@seencel.test", full_name="Ana Pérez")

INTENTS = {
    "course": CheckoutIntent(
        user_id=USER_ID, product_type=ProductType.COURSE, product_id=COURSE_ID, access_months=12
    ),
    "course_with_coupon": CheckoutIntent(
        user_id=USER_ID, product_type=ProductType.COURSE, product_id=COURSE_ID, access_months=12,
        coupon_code="BIENVENIDA2026", coupon_id=COUPON_ID,
    ),
    "subscription_monthly": CheckoutIntent(
        user_id=USER_ID, product_type=ProductType.SUBSCRIPTION, product_id=PLAN_ID,
        organization_id=ORG_ID, billing_period=BillingPeriod.MONTHLY,
    ),
    "subscription_annual": CheckoutIntent(
        user_id=USER_ID, product_type=ProductType.SUBSCRIPTION, product_id=PLAN_ID,
        organization_id=ORG_ID, billing_period=BillingPeriod.ANNUAL,
    ),
}


def _product(intent):
    return PLAN if intent.is_subscription else COURSE


@pytest.mark.parametrize("name", sorted(INTENTS))
def test_paypal_order_round_trips_uuid_intents(name):
    # custom_id no lleva meses: PayPal se cumple con access_months del curso
    intent = replace(INTENTS[name], access_months=None)
    payload = PayPalOrderBuilder().build(
        intent=intent, product=_product(intent), unit_price=Decimal("80"), currency="USD"
    )

    unit = payload["purchase_units"][0]
    assert len(unit["custom_id"]) <= 127
    assert len(unit["invoice_id"]) <= 127
    assert resolve_paypal_intent(unit["custom_id"], unit["invoice_id"]) == intent


@pytest.mark.parametrize("name", sorted(INTENTS))
def test_mercadopago_preference_round_trips_uuid_intents(name):
    intent = INTENTS[name]
    payload = MercadoPagoPreferenceBuilder().build(
        intent=intent, product=_product(intent), unit_price=Decimal("80000"), currency="ARS", payer=PAYER
    )

    reference = payload["external_reference"]
    assert len(reference) <= 256
    assert resolve_mercadopago_intent(reference) == intent
    assert resolve_mercadopago_intent(reference, payload["metadata"]) == intent


def test_invoice_id_keeps_coupon_id_when_identity_does_not_fit():
    codec = InvoiceReferenceCodec(clock=lambda: 1767225600)

    encoded = codec.encode(INTENTS["course_with_coupon"])

    assert encoded == f"cpn:BIENVENIDA2026;cid:{COUPON_ID};ts:1767225600"
    values = InvoiceReferenceCodec.parse(encoded)
    assert "u" not in values and "p" not in values


def test_invoice_id_for_uuid_subscription_is_timestamp_only():
    codec = InvoiceReferenceCodec(clock=lambda: 1767225600)

    assert codec.encode(INTENTS["subscription_monthly"]) == "ts:1767225600"


def test_invoice_id_keeps_full_form_when_it_fits():
    codec = InvoiceReferenceCodec(clock=lambda: 1767225600)
    intent = CheckoutIntent(user_id="user-1", product_type=ProductType.COURSE, product_id=COURSE_ID)

    encoded = codec.encode(intent)

    assert encoded.startswith("u:user-1;t:c;p:")
    assert codec.decode(encoded) == intent

# Fin del archivo backend/tests/modules/payments/facades/test_checkout_builders.py
