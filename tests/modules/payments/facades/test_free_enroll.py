# backend/tests/modules/payments/facades/test_free_enroll.py
from decimal import Decimal

import pytest

from app.shared.errors import InvalidState, ValidationError
from app.modules.auth.context import RequestContext
from app.modules.coupons.models import CouponRedemption
from app.modules.learning.models import CourseEnrollment
from app.modules.payments.enums import PaymentProvider, PaymentStatus
from app.modules.payments.facades.checkout import FreeEnrollRequest, free_enroll
from app.modules.payments.models import Payment

CTX = RequestContext(auth_id="auth-user-1", user_id="user-1", full_name="Ana Pérez")


@pytest.mark.asyncio
async def test_full_coupon_enrolls_without_provider(db, seed, fetch):
    await seed.course()
    coupon = await seed.coupon("GRATIS", amount="100")

    response = await free_enroll(db, ctx=CTX, payload=FreeEnrollRequest(course_id="curso-revit", coupon_code="gratis"))

    assert response.success is True
    [enrollment] = await fetch(db, CourseEnrollment, user_id="user-1")
    assert enrollment.id == response.enrollment_id
    [payment] = await fetch(db, Payment, user_id="user-1")
    assert payment.provider == PaymentProvider.FREE
    assert payment.status == PaymentStatus.COMPLETED
    assert payment.amount == Decimal("0")
    [redemption] = await fetch(db, CouponRedemption, coupon_id=coupon.id)
    assert redemption.payment_id == payment.id
    assert redemption.final_price == Decimal("0")
    assert redemption.discount_amount == Decimal("100.00")


@pytest.mark.asyncio
async def test_partial_coupon_is_not_free(db, seed, count):
    await seed.course()
    await seed.coupon("SAVE20", amount="20")

    with pytest.raises(ValidationError) as exc:
        await free_enroll(db, ctx=CTX, payload=FreeEnrollRequest(course_id="course-1", coupon_code="SAVE20"))

    assert exc.value.reason == "coupon_not_free"
    assert await count(db, CourseEnrollment) == 0


@pytest.mark.asyncio
async def test_already_enrolled_user(db, seed):
    await seed.course()
    await seed.coupon("GRATIS", amount="100", per_user_limit=0)
    payload = FreeEnrollRequest(course_id="course-1", coupon_code="GRATIS")
    await free_enroll(db, ctx=CTX, payload=payload)

    with pytest.raises(InvalidState) as exc:
        await free_enroll(db, ctx=CTX, payload=payload)
    assert exc.value.reason == "already_enrolled"

# Fin del archivo backend/tests/modules/payments/facades/test_free_enroll.py
