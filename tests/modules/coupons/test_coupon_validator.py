# backend/tests/modules/coupons/test_coupon_validator.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.modules.coupons.services import CouponApplication, CouponRejection, CouponValidator

NOW = datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc)


async def _validate(db, code, *, base="100.00", currency="USD", user_id="user-1", product_id="course-1"):
    return await CouponValidator().validate(
        db,
        code=code,
        product_id=product_id,
        base_price=Decimal(base),
        currency=currency,
        user_id=user_id,
        now=NOW,
    )


@pytest.mark.asyncio
async def test_percent_coupon_discounts_base_price(db, seed):
    coupon = await seed.coupon("SAVE20", amount="20")

    result = await _validate(db, "save20")

    assert isinstance(result, CouponApplication)
    assert result.final_price == Decimal("80.00")
    assert result.discount_amount == Decimal("20.00")
    assert result.coupon_id == coupon.id
    assert result.code == "SAVE20"
    assert result.descriptor == "20%"


@pytest.mark.asyncio
async def test_fixed_coupon_in_matching_currency(db, seed):
    await seed.coupon("MENOS15", discount_type="fixed", amount="15", currency="USD")

    result = await _validate(db, "MENOS15")

    assert isinstance(result, CouponApplication)
    assert result.final_price == Decimal("85.00")


@pytest.mark.asyncio
async def test_fixed_coupon_currency_mismatch(db, seed):
    await seed.coupon("MENOS15", discount_type="fixed", amount="15", currency="USD")

    result = await _validate(db, "MENOS15", currency="ARS")

    assert isinstance(result, CouponRejection)
    assert result.reason == "currency_mismatch"


@pytest.mark.asyncio
async def test_full_discount_is_flagged_as_free_enrollment(db, seed):
    await seed.coupon("GRATIS", amount="100")

    result = await _validate(db, "GRATIS")

    assert isinstance(result, CouponRejection)
    assert result.is_free_enrollment is True
    assert result.reason == "free_enrollment"


@pytest.mark.asyncio
async def test_unknown_coupon(db, seed):
    result = await _validate(db, "NOPE")
    assert isinstance(result, CouponRejection)
    assert result.reason == "not_found"
    assert result.message == "El cupón no existe"


@pytest.mark.parametrize(
    "kwargs, reason",
    [
        ({"is_active": False}, "inactive"),
        ({"starts_at": NOW + timedelta(days=1)}, "not_started"),
        ({"expires_at": NOW - timedelta(seconds=1)}, "expired"),
        ({"applies_to_all": False, "course_id": "other-course"}, "not_applicable"),
    ],
)
@pytest.mark.asyncio
async def test_ineligible_coupons(db, seed, kwargs, reason):
    await seed.coupon("PROMO", **kwargs)

    result = await _validate(db, "PROMO")

    assert isinstance(result, CouponRejection)
    assert result.reason == reason


@pytest.mark.asyncio
async def test_per_user_limit_after_redemption(db, seed):
    coupon = await seed.coupon("SAVE20", per_user_limit=1)
    validator = CouponValidator()
    await validator.record_redemption(
        db,
        coupon_id=coupon.id,
        user_id="user-1",
        course_id="course-1",
        payment_id=None,
        original_price=Decimal("100"),
        final_price=Decimal("80"),
        currency="usd",
    )
    await db.commit()

    assert (await _validate(db, "SAVE20")).reason == "already_used"
    assert isinstance(await _validate(db, "SAVE20", user_id="user-2"), CouponApplication)


@pytest.mark.asyncio
async def test_global_usage_limit(db, seed):
    coupon = await seed.coupon("ONCE", max_redemptions=1, per_user_limit=0)
    await CouponValidator().record_redemption(
        db,
        coupon_id=coupon.id,
        user_id="someone-else",
        course_id="course-1",
        payment_id=None,
        original_price=Decimal("100"),
        final_price=Decimal("80"),
        currency="USD",
    )
    await db.commit()

    result = await _validate(db, "ONCE")
    assert result.reason == "usage_limit_reached"

# Fin del archivo backend/tests/modules/coupons/test_coupon_validator.py
