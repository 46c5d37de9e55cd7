# backend/tests/modules/catalog/test_pricing_resolver.py
from decimal import Decimal

import pytest

from app.shared.errors import ExchangeRateUnavailable, InvalidPrice, NotFound
from app.modules.catalog.services import CatalogService, PricingResolver
from app.modules.payments.enums import BillingPeriod


@pytest.mark.asyncio
async def test_course_price_converted_with_active_rate(db, seed):
    await seed.course(price="100.00")
    await seed.rate("ARS", 1000)

    course = await CatalogService().load_course(db, "course-1")
    price = await PricingResolver().resolve(db, course, "ARS")

    assert price == Decimal("100000.00")


@pytest.mark.asyncio
async def test_usd_price_is_not_converted(db, seed):
    await seed.course(price="49.90")
    course = await CatalogService().load_course(db, "curso-revit")

    assert await PricingResolver().resolve(db, course, "usd") == Decimal("49.90")


@pytest.mark.asyncio
async def test_inactive_rate_is_ignored(db, seed):
    await seed.course()
    await seed.rate("ARS", 900, is_active=False)
    course = await CatalogService().load_course(db, "course-1")

    with pytest.raises(ExchangeRateUnavailable) as exc:
        await PricingResolver().resolve(db, course, "ARS")
    assert exc.value.status_code == 500


@pytest.mark.parametrize("price", [None, "0", "-5"])
@pytest.mark.asyncio
async def test_non_positive_course_price_fails_closed(db, seed, price):
    await seed.course(price=price)
    course = await CatalogService().load_course(db, "course-1")

    with pytest.raises(InvalidPrice):
        await PricingResolver().resolve(db, course, "USD")


@pytest.mark.asyncio
async def test_plan_price_follows_billing_period(db, seed):
    await seed.plan(monthly="20.00", annual="200.00")
    await seed.rate("ARS", "1000.5")
    plan = await CatalogService().load_plan(db, "pro")
    resolver = PricingResolver()

    assert await resolver.resolve(db, plan, "USD", BillingPeriod.ANNUAL) == Decimal("200.00")
    assert await resolver.resolve(db, plan, "ARS", BillingPeriod.MONTHLY) == Decimal("20010.00")


@pytest.mark.asyncio
async def test_plan_without_annual_amount_is_invalid(db, seed):
    await seed.plan(annual=None)
    plan = await CatalogService().load_plan(db, "plan-pro")

    with pytest.raises(InvalidPrice):
        await PricingResolver().resolve(db, plan, "USD", BillingPeriod.ANNUAL)


@pytest.mark.asyncio
async def test_inactive_course_is_not_found(db, seed):
    await seed.course(is_active=False)

    with pytest.raises(NotFound) as exc:
        await CatalogService().load_course(db, "course-1")
    assert exc.value.reason == "course"

# Fin del archivo backend/tests/modules/catalog/test_pricing_resolver.py
