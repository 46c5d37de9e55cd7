# backend/tests/modules/payments/routes/test_capture_routes.py
import httpx
import pytest

from app.modules.payments.codecs import CheckoutIntent, CompactIntentCodec
from app.modules.payments.enums import ProductType
from app.modules.payments.models import Payment

REFERENCE = CompactIntentCodec().encode(
    CheckoutIntent(user_id="user-1", product_type=ProductType.COURSE, product_id="course-1")
)


def _order(status="COMPLETED"):
    return {
        "id": "ORDER-7",
        "status": "COMPLETED",
        "purchase_units": [
            {
                "payments": {
                    "captures": [
                        {
                            "id": "CAP-7",
                            "status": status,
                            "custom_id": "user-1|course-1||",
                            "amount": {"currency_code": "USD", "value": "100.00"},
                        }
                    ]
                }
            }
        ],
    }


@pytest.mark.asyncio
async def test_paypal_return_confirms_payment(async_client, seed, paypal_api, db, count):
    await seed.course()
    paypal_api.on("POST", "/v2/checkout/orders/ORDER-7/capture", _order(), status=201)

    resp = await async_client.get("/payments/paypal/return", params={"token": "ORDER-7", "PayerID": "P1"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Pago confirmado" in resp.text
    assert "https://app.seencel.test/billing" in resp.text
    assert await count(db, Payment, provider_payment_id="CAP-7") == 1

    # segunda visita (refresh del navegador)
    paypal_api.on(
        "POST", "/v2/checkout/orders/ORDER-7/capture",
        {"details": [{"issue": "ORDER_ALREADY_CAPTURED"}]}, status=422,
    )
    paypal_api.on("GET", "/v2/checkout/orders/ORDER-7", _order())
    again = await async_client.get("/payments/paypal/return", params={"token": "ORDER-7"})
    assert again.status_code == 200
    assert "Pago confirmado" in again.text
    assert await count(db, Payment) == 1


@pytest.mark.asyncio
async def test_paypal_return_without_token(async_client):
    resp = await async_client.get("/payments/paypal/return")

    assert resp.status_code == 400
    assert "Falta el identificador" in resp.text


@pytest.mark.asyncio
async def test_paypal_return_declined_capture(async_client, seed, paypal_api):
    await seed.course()
    paypal_api.on("POST", "/v2/checkout/orders/ORDER-7/capture", _order(status="DECLINED"), status=201)

    resp = await async_client.get("/payments/paypal/return", params={"token": "ORDER-7"})

    assert resp.status_code == 200
    assert "Pago pendiente" in resp.text


@pytest.mark.asyncio
async def test_paypal_provider_down_renders_502(async_client, paypal_api):
    def _down(request):
        raise httpx.ReadTimeout("slow", request=request)

    paypal_api.on("POST", "/v2/checkout/orders/ORDER-7/capture", _down)

    resp = await async_client.get("/payments/paypal/return", params={"token": "ORDER-7"})

    assert resp.status_code == 502
    assert "No pudimos confirmar el pago" in resp.text


@pytest.mark.asyncio
async def test_mp_return_uses_collection_id(async_client, seed, mp_api, db, count):
    await seed.course()
    mp_api.on("GET", "/v1/payments/321", {
        "id": 321, "status": "approved", "transaction_amount": 100, "currency_id": "USD",
        "external_reference": REFERENCE,
    })

    resp = await async_client.get(
        "/payments/mp/return", params={"payment_id": "null", "collection_id": "321"}
    )

    assert resp.status_code == 200
    assert "Pago confirmado" in resp.text
    assert await count(db, Payment, provider_payment_id="321") == 1


@pytest.mark.asyncio
async def test_mp_return_without_metadata_is_processing(async_client, mp_api):
    mp_api.on("GET", "/v1/payments/322", {"id": 322, "status": "approved", "transaction_amount": 10})

    resp = await async_client.get("/payments/mp/return", params={"payment_id": "322"})

    assert resp.status_code == 200
    assert "procesando" in resp.text


@pytest.mark.asyncio
async def test_mp_return_missing_id(async_client, mp_api):
    resp = await async_client.get("/payments/mp/return", params={"payment_id": "null"})

    assert resp.status_code == 400
    assert mp_api.requests == []

# Fin del archivo backend/tests/modules/payments/routes/test_capture_routes.py
