# backend/tests/modules/payments/routes/test_bank_transfer_routes.py
import base64

import pytest

PNG_B64 = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode()


@pytest.fixture
async def people(seed):
    await seed.user("user-1")
    await seed.user("admin-1", auth_id="auth-admin")
    await seed.organization("org-platform")
    await seed.member("org-platform", "admin-1", role="admin")
    await seed.course()


@pytest.mark.asyncio
async def test_transfer_lifecycle(async_client, auth_headers, people, storage):
    created = await async_client.post(
        "/payments/bank-transfers",
        json={"courseId": "course-1", "amount": "95.00", "currency": "USD", "payerName": "Ana Pérez"},
        headers=auth_headers(),
    )
    assert created.status_code == 201, created.text
    transfer = created.json()
    assert transfer["status"] == "pending"
    assert transfer["courseId"] == "course-1"

    uploaded = await async_client.post(
        "/payments/bank-transfers/receipt",
        json={"transferId": transfer["id"], "fileName": "recibo.png", "fileDataBase64": PNG_B64},
        headers=auth_headers(),
    )
    assert uploaded.status_code == 200, uploaded.text
    assert uploaded.json()["success"] is True
    assert uploaded.json()["receiptUrl"].endswith(f"{transfer['id']}.png")
    assert storage.uploads[0]["content_type"] == "image/png"

    forbidden = await async_client.post(
        f"/payments/bank-transfers/{transfer['id']}/approve", headers=auth_headers()
    )
    assert forbidden.status_code == 403

    approved = await async_client.post(
        f"/payments/bank-transfers/{transfer['id']}/approve", headers=auth_headers("auth-admin")
    )
    assert approved.status_code == 200, approved.text
    assert approved.json()["status"] == "approved"
    assert approved.json()["reviewedBy"] == "admin-1"

    fetched = await async_client.get(f"/payments/bank-transfers/{transfer['id']}", headers=auth_headers())
    assert fetched.json()["status"] == "approved"
    assert fetched.json()["paymentId"]


@pytest.mark.asyncio
async def test_receipt_for_transfer_without_course(async_client, auth_headers, people, seed, storage):
    transfer = await seed.transfer(course_id=None, order_id="missing-session")

    resp = await async_client.post(
        "/payments/bank-transfers/receipt",
        json={"transferId": transfer.id, "fileName": "recibo.pdf", "fileDataBase64": "JVBERi0xLjQ="},
        headers=auth_headers(),
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == "missing_product_reference"
    assert storage.uploads == []


@pytest.mark.asyncio
async def test_foreign_transfer_is_not_found(async_client, auth_headers, people, seed):
    transfer = await seed.transfer(user_id="user-2")

    resp = await async_client.get(f"/payments/bank-transfers/{transfer.id}", headers=auth_headers())

    assert resp.status_code == 404

# Fin del archivo backend/tests/modules/payments/routes/test_bank_transfer_routes.py
