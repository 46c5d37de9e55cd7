# backend/tests/modules/payments/routes/test_checkout_routes.py
import json

import pytest

from app.modules.learning.models import CourseEnrollment

PAYPAL_ORDER = {
    "id": "PP-ORDER-9",
    "links": [{"rel": "approve", "href": "https://paypal.test/checkoutnow?token=PP-ORDER-9"}],
}


@pytest.fixture
async def buyer(seed):
    return await seed.user("user-1", full_name="Ana Pérez")


@pytest.mark.asyncio
async def test_paypal_checkout_returns_camel_case(async_client, auth_headers, seed, buyer, paypal_api):
    await seed.course()
    paypal_api.on("POST", "/v2/checkout/orders", PAYPAL_ORDER, status=201)

    resp = await async_client.post(
        "/payments/checkout/paypal",
        json={"productType": "course", "productId": "curso-revit", "userId": "intruso"},
        headers=auth_headers(),
    )

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "redirectUrl": "https://paypal.test/checkoutnow?token=PP-ORDER-9",
        "orderId": "PP-ORDER-9",
    }
    sent = json.loads(paypal_api.calls("POST", "/v2/checkout/orders")[0].content)
    assert sent["purchase_units"][0]["custom_id"].startswith("user-1|")


@pytest.mark.asyncio
async def test_mercadopago_checkout_accepts_snake_case(async_client, auth_headers, seed, buyer, mp_api):
    await seed.course()
    await seed.rate("ARS", 1000)
    mp_api.on("POST", "/checkout/preferences", {"id": "pref-9", "init_point": "https://mp.test/init/pref-9"})

    resp = await async_client.post(
        "/payments/checkout/mercadopago",
        json={"product_type": "course", "product_id": "course-1"},
        headers=auth_headers(),
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["orderId"] == "pref-9"


@pytest.mark.asyncio
async def test_checkout_requires_session(async_client, paypal_api):
    resp = await async_client.post("/payments/checkout/paypal", json={"productId": "course-1"})

    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"
    assert paypal_api.requests == []


@pytest.mark.asyncio
async def test_free_coupon_response_body(async_client, auth_headers, seed, buyer):
    await seed.course()
    await seed.coupon("GRATIS", amount="100")

    resp = await async_client.post(
        "/payments/checkout/paypal",
        json={"productId": "course-1", "couponCode": "gratis"},
        headers=auth_headers(),
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "free_enrollment"
    assert body["freeEnrollment"] is True
    assert body["couponCode"] == "GRATIS"


@pytest.mark.asyncio
async def test_schema_errors_are_400(async_client, auth_headers, buyer):
    resp = await async_client.post("/payments/checkout/paypal", json={}, headers=auth_headers())

    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


@pytest.mark.asyncio
async def test_missing_exchange_rate_is_500(async_client, auth_headers, seed, buyer, mp_api):
    await seed.course()

    resp = await async_client.post(
        "/payments/checkout/mercadopago", json={"productId": "course-1"}, headers=auth_headers()
    )

    assert resp.status_code == 500
    assert resp.json()["error"] == "exchange_rate_unavailable"
    assert mp_api.requests == []


@pytest.mark.asyncio
async def test_provider_rejection_keeps_provider_status(async_client, auth_headers, seed, buyer, paypal_api):
    await seed.course()
    paypal_api.on("POST", "/v2/checkout/orders", {"name": "INVALID_REQUEST"}, status=422)

    resp = await async_client.post(
        "/payments/checkout/paypal", json={"productId": "course-1"}, headers=auth_headers()
    )

    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "provider_error"
    assert body["provider"] == "paypal"
    assert body["details"] == {"name": "INVALID_REQUEST"}


@pytest.mark.asyncio
async def test_free_enroll_endpoint(async_client, auth_headers, seed, buyer, db, count):
    await seed.course()
    await seed.coupon("GRATIS", amount="100")

    resp = await async_client.post(
        "/payments/checkout/free-enroll",
        json={"courseId": "course-1", "couponCode": "GRATIS"},
        headers=auth_headers(),
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["success"] is True
    assert resp.json()["enrollmentId"]
    assert await count(db, CourseEnrollment, user_id="user-1") == 1

# Fin del archivo backend/tests/modules/payments/routes/test_checkout_routes.py
