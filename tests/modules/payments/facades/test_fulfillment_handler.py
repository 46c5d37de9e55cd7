# backend/tests/modules/payments/facades/test_fulfillment_handler.py
import logging
from decimal import Decimal

import pytest

from app.modules.coupons.models import CouponRedemption
from app.modules.learning.models import CourseEnrollment, EnrollmentStatus
from app.modules.organizations.models import Organization, OrganizationSubscription, SubscriptionStatus
from app.modules.payments.codecs import CheckoutIntent
from app.modules.payments.enums import BillingPeriod, PaymentProvider, PaymentStatus, ProductType
from app.modules.payments.facades.capture import CaptureOutcome, FulfillmentHandler, ProviderCapture
from app.modules.payments.metrics import registry
from app.modules.payments.models import Payment, PaymentEvent
from app.modules.payments.repositories import PaymentRepository

COURSE_INTENT = CheckoutIntent(
    user_id="user-1", product_type=ProductType.COURSE, product_id="course-1", access_months=6
)


def _capture(ppid="PAY-1", *, approved=True, status="COMPLETED", amount="80.00"):
    return ProviderCapture(
        provider=PaymentProvider.PAYPAL,
        provider_payment_id=ppid,
        status=status,
        approved=approved,
        amount=Decimal(amount),
        currency="USD",
        correlation="user-1|course-1||",
        order_id="ORDER-1",
        event_type="return",
        raw={"id": "ORDER-1"},
    )


def _resolver(intent):
    return lambda capture: intent


class FailingEnrollments:
    async def enroll(self, session, **kwargs):
        raise RuntimeError("enrollment table locked")


class UndeletableRepository(PaymentRepository):
    async def delete_by_id(self, session, id_):
        raise RuntimeError("connection lost")


class BlindRepository(PaymentRepository):
    """Simula la carrera: la verificación previa no ve el pago de la otra entrega."""

    async def get_by_provider_payment_id(self, session, provider_payment_id):
        return None


@pytest.mark.asyncio
async def test_approved_capture_enrolls_user(db, seed, fetch, count):
    await seed.course()

    result = await FulfillmentHandler().process(db, _capture(), _resolver(COURSE_INTENT))

    assert result.outcome == CaptureOutcome.FULFILLED
    [payment] = await fetch(db, Payment, provider_payment_id="PAY-1")
    assert payment.id == result.payment_id
    assert payment.status == PaymentStatus.COMPLETED
    assert payment.amount == Decimal("80.00")
    assert payment.user_id == "user-1"
    [enrollment] = await fetch(db, CourseEnrollment, user_id="user-1", course_id="course-1")
    assert enrollment.status == EnrollmentStatus.ACTIVE
    assert await count(db, PaymentEvent, provider_payment_id="PAY-1") == 1


@pytest.mark.asyncio
async def test_second_delivery_is_a_no_op(db, seed, count):
    await seed.course()
    handler = FulfillmentHandler()

    first = await handler.process(db, _capture(), _resolver(COURSE_INTENT))
    second = await handler.process(db, _capture(), _resolver(COURSE_INTENT))

    assert first.outcome == CaptureOutcome.FULFILLED
    assert second.outcome == CaptureOutcome.ALREADY_PROCESSED
    assert second.payment_id == first.payment_id
    assert await count(db, Payment) == 1
    assert await count(db, CourseEnrollment) == 1
    # ambas entregas quedan en la bitácora
    assert await count(db, PaymentEvent, provider_payment_id="PAY-1") == 2


@pytest.mark.asyncio
async def test_not_approved_only_audits(db, seed, count):
    await seed.course()

    result = await FulfillmentHandler().process(
        db, _capture(approved=False, status="DECLINED"), _resolver(COURSE_INTENT)
    )

    assert result.outcome == CaptureOutcome.NOT_APPROVED
    assert result.message == "DECLINED"
    assert await count(db, Payment) == 0
    assert await count(db, PaymentEvent) == 1


@pytest.mark.asyncio
async def test_missing_metadata_is_not_an_error(db, count):
    before = registry.get_sample_value(
        "payments_capture_outcome_total", {"provider": "paypal", "outcome": "metadata_missing"}
    ) or 0

    result = await FulfillmentHandler().process(db, _capture(), _resolver(None))

    assert result.outcome == CaptureOutcome.METADATA_MISSING
    assert not result.outcome.is_success
    assert await count(db, Payment) == 0
    assert registry.get_sample_value(
        "payments_capture_outcome_total", {"provider": "paypal", "outcome": "metadata_missing"}
    ) == before + 1


@pytest.mark.asyncio
async def test_subscription_upgrades_organization_plan(db, seed, fetch):
    await seed.plan()
    await seed.organization("org-1")
    intent = CheckoutIntent(
        user_id="user-1",
        product_type=ProductType.SUBSCRIPTION,
        product_id="plan-pro",
        organization_id="org-1",
        billing_period=BillingPeriod.ANNUAL,
    )

    result = await FulfillmentHandler().process(db, _capture(amount="200.00"), _resolver(intent))

    assert result.outcome == CaptureOutcome.FULFILLED
    [org] = await fetch(db, Organization, id="org-1")
    assert org.plan_id == "plan-pro"
    [subscription] = await fetch(db, OrganizationSubscription, organization_id="org-1")
    assert subscription.status == SubscriptionStatus.ACTIVE
    assert subscription.billing_period == BillingPeriod.ANNUAL
    assert subscription.payment_id == result.payment_id


@pytest.mark.asyncio
async def test_coupon_redemption_recorded_with_payment(db, seed, fetch):
    await seed.course()
    coupon = await seed.coupon("SAVE20")
    intent = CheckoutIntent(
        user_id="user-1", product_type=ProductType.COURSE, product_id="course-1",
        coupon_code="SAVE20", coupon_id=coupon.id,
    )

    result = await FulfillmentHandler().process(db, _capture(), _resolver(intent))

    [redemption] = await fetch(db, CouponRedemption, coupon_id=coupon.id)
    assert redemption.payment_id == result.payment_id
    assert redemption.final_price == Decimal("80.00")
    [payment] = await fetch(db, Payment, id=result.payment_id)
    assert payment.coupon_code == "SAVE20"


@pytest.mark.asyncio
async def test_failed_fulfillment_deletes_payment(db, seed, count):
    await seed.course()
    handler = FulfillmentHandler(enrollments=FailingEnrollments())

    result = await handler.process(db, _capture(), _resolver(COURSE_INTENT))

    assert result.outcome == CaptureOutcome.FAILED
    assert result.message == "fulfillment_failed"
    assert result.payment_id is None
    assert await count(db, Payment) == 0

    # la siguiente entrega reintenta desde cero
    retry = await FulfillmentHandler().process(db, _capture(), _resolver(COURSE_INTENT))
    assert retry.outcome == CaptureOutcome.FULFILLED


@pytest.mark.asyncio
async def test_failed_compensation_logs_reconciliation(db, seed, count, caplog):
    await seed.course()
    handler = FulfillmentHandler(payment_repo=UndeletableRepository(), enrollments=FailingEnrollments())
    before = registry.get_sample_value(
        "payments_compensation_total", {"kind": "fulfillment", "result": "failed"}
    ) or 0

    with caplog.at_level(logging.CRITICAL):
        result = await handler.process(db, _capture(), _resolver(COURSE_INTENT))

    assert result.outcome == CaptureOutcome.FAILED
    assert any(
        r.levelno == logging.CRITICAL and "reconciliation_required" in r.getMessage() for r in caplog.records
    )
    assert await count(db, Payment) == 1
    assert registry.get_sample_value(
        "payments_compensation_total", {"kind": "fulfillment", "result": "failed"}
    ) == before + 1


@pytest.mark.asyncio
async def test_concurrent_insert_resolves_to_already_processed(db, seed, count):
    await seed.course()
    first = await FulfillmentHandler().process(db, _capture(), _resolver(COURSE_INTENT))
    assert first.outcome == CaptureOutcome.FULFILLED

    result = await FulfillmentHandler(payment_repo=BlindRepository()).process(
        db, _capture(), _resolver(COURSE_INTENT)
    )

    assert result.outcome == CaptureOutcome.ALREADY_PROCESSED
    assert await count(db, Payment) == 1


@pytest.mark.asyncio
async def test_unknown_course_compensates(db, count):
    result = await FulfillmentHandler().process(db, _capture(), _resolver(COURSE_INTENT))

    assert result.outcome == CaptureOutcome.FAILED
    assert await count(db, Payment) == 0

# Fin del archivo backend/tests/modules/payments/facades/test_fulfillment_handler.py
