# backend/tests/modules/payments/facades/test_bank_transfer.py
import base64
import logging
from decimal import Decimal

import pytest

from app.shared.errors import (
    Forbidden,
    InvalidState,
    MissingProductReference,
    NotFound,
    ProviderUnavailable,
    ValidationError,
)
from app.modules.auth.context import RequestContext
from app.modules.catalog.models import CheckoutSession, CoursePrice
from app.modules.learning.models import CourseEnrollment, EnrollmentStatus
from app.modules.payments.enums import BankTransferStatus, PaymentProvider, PaymentStatus
from app.modules.payments.facades.bank_transfer import (
    CreateTransferRequest,
    UploadReceiptRequest,
    create_transfer,
    get_transfer,
    review_transfer,
    upload_receipt,
)
from app.modules.payments.facades.bank_transfer.upload_receipt import decode_base64_payload
from app.modules.payments.models import BankTransferPayment, Payment
from app.modules.payments.repositories import BankTransferRepository, PaymentRepository

BUYER = RequestContext(auth_id="auth-user-1", user_id="user-1", email="ana@seencel.test", full_name="Ana Pérez")
ADMIN = RequestContext(auth_id="auth-admin", user_id="admin-1", email="admin@seencel.test", full_name="Admin")

PDF_B64 = base64.b64encode(b"%PDF-1.4 comprobante").decode()


class BrokenAttachRepository(BankTransferRepository):
    async def attach_receipt(self, session, transfer, **kwargs):
        raise RuntimeError("update rechazado")


class UndeletablePayments(PaymentRepository):
    async def delete_by_id(self, session, obj_id):
        raise RuntimeError("delete rechazado")


def _upload(transfer_id, *, file_name="comprobante.pdf", data=PDF_B64):
    return UploadReceiptRequest(transfer_id=transfer_id, file_name=file_name, file_data_base64=data)


@pytest.fixture
async def platform_admin(seed):
    await seed.organization("org-platform")
    await seed.member("org-platform", "admin-1", role="admin")


async def _seed_checkout_session(db, *, course_id="abc", session_id="order-1"):
    db.add(CoursePrice(id="price-1", course_id=course_id, currency_code="USD", amount=Decimal("100")))
    db.add(CheckoutSession(id=session_id, user_id="user-1", course_price_id="price-1"))
    await db.commit()


# ---------------------------------------------------------------------------
# Alta y consulta
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_create_transfer_applies_discount(db, seed):
    await seed.course()

    transfer = await create_transfer(
        db,
        ctx=BUYER,
        payload=CreateTransferRequest(course_id="curso-revit", amount=Decimal("100.00"), currency="usd"),
    )

    assert transfer.status == BankTransferStatus.PENDING
    assert transfer.course_id == "course-1"
    assert transfer.currency == "USD"
    assert transfer.discount_percent == Decimal("5.0")
    assert transfer.discount_amount == Decimal("5.00")
    assert transfer.user_id == "user-1"


@pytest.mark.asyncio
async def test_create_transfer_for_unknown_course(db):
    with pytest.raises(NotFound):
        await create_transfer(
            db, ctx=BUYER,
            payload=CreateTransferRequest(course_id="nope", amount=Decimal("10"), currency="USD"),
        )


@pytest.mark.asyncio
async def test_transfers_are_private_to_their_owner(db, seed):
    transfer = await seed.transfer()

    assert (await get_transfer(db, ctx=BUYER, transfer_id=transfer.id)).id == transfer.id
    with pytest.raises(NotFound):
        await get_transfer(db, ctx=ADMIN, transfer_id=transfer.id)


# ---------------------------------------------------------------------------
# Comprobante
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_upload_resolves_course_from_checkout_session(db, seed, storage, fetch):
    await _seed_checkout_session(db)
    transfer = await seed.transfer(course_id=None, order_id="order-1")

    response = await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id), storage=storage)

    [upload] = storage.uploads
    assert upload["path"] == f"{transfer.id}.pdf"
    assert upload["content_type"] == "application/pdf"
    assert upload["overwrite"] is True
    assert upload["data"] == b"%PDF-1.4 comprobante"
    assert response.receipt_url.endswith(f"/{transfer.id}.pdf")

    [saved] = await fetch(db, BankTransferPayment, id=transfer.id)
    assert saved.course_id == "abc"
    assert saved.receipt_url == response.receipt_url
    [payment] = await fetch(db, Payment, id=saved.payment_id)
    assert payment.provider == PaymentProvider.BANK_TRANSFER
    assert payment.provider_payment_id is None
    assert payment.status == PaymentStatus.PENDING
    assert payment.product_id == "abc"
    assert payment.amount == Decimal("95.00")


@pytest.mark.asyncio
async def test_upload_without_course_fails_before_storage(db, seed, storage, count):
    transfer = await seed.transfer(course_id=None, order_id="unknown-order")

    with pytest.raises(MissingProductReference) as exc:
        await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id), storage=storage)

    assert exc.value.status_code == 400
    assert storage.uploads == []
    assert await count(db, Payment) == 0


@pytest.mark.asyncio
async def test_upload_for_foreign_or_reviewed_transfer(db, seed, storage):
    foreign = await seed.transfer(user_id="user-2")
    reviewed = await seed.transfer(status=BankTransferStatus.APPROVED)

    with pytest.raises(NotFound):
        await upload_receipt(db, ctx=BUYER, payload=_upload(foreign.id), storage=storage)
    with pytest.raises(InvalidState):
        await upload_receipt(db, ctx=BUYER, payload=_upload(reviewed.id), storage=storage)


@pytest.mark.parametrize(
    "file_name, data, reason",
    [
        ("comprobante.exe", PDF_B64, "invalid_file_extension"),
        ("comprobante", PDF_B64, "invalid_file_extension"),
        ("comprobante.png", "no es base64!!", "invalid_base64"),
    ],
)
@pytest.mark.asyncio
async def test_upload_rejects_bad_files(db, seed, storage, file_name, data, reason):
    transfer = await seed.transfer()

    with pytest.raises(ValidationError) as exc:
        await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id, file_name=file_name, data=data), storage=storage)

    assert exc.value.reason == reason
    assert storage.uploads == []


def test_data_url_prefix_is_stripped():
    assert decode_base64_payload(f"data:application/pdf;base64,{PDF_B64}") == b"%PDF-1.4 comprobante"
    with pytest.raises(ValidationError):
        decode_base64_payload("")


@pytest.mark.asyncio
async def test_reupload_reuses_pending_payment(db, seed, storage, count):
    transfer = await seed.transfer()

    await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id), storage=storage)
    await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id, file_name="foto.JPG"), storage=storage)

    assert await count(db, Payment) == 1
    assert storage.uploads[1]["path"] == f"{transfer.id}.jpg"
    assert storage.uploads[1]["content_type"] == "image/jpeg"


@pytest.mark.asyncio
async def test_storage_failure_is_provider_unavailable(db, seed, storage, count):
    transfer = await seed.transfer()
    storage.fail = True

    with pytest.raises(ProviderUnavailable) as exc:
        await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id), storage=storage)

    assert exc.value.reason == "storage"
    assert await count(db, Payment) == 0


@pytest.mark.asyncio
async def test_failed_final_update_deletes_new_payment(db, seed, storage, count, fetch):
    transfer = await seed.transfer()

    with pytest.raises(RuntimeError):
        await upload_receipt(
            db, ctx=BUYER, payload=_upload(transfer.id), storage=storage,
            transfer_repo=BrokenAttachRepository(),
        )

    assert await count(db, Payment) == 0
    [saved] = await fetch(db, BankTransferPayment, id=transfer.id)
    assert saved.payment_id is None


@pytest.mark.asyncio
async def test_failed_cleanup_is_logged_for_reconciliation(db, seed, storage, count, caplog):
    transfer = await seed.transfer()

    with caplog.at_level(logging.CRITICAL), pytest.raises(RuntimeError):
        await upload_receipt(
            db, ctx=BUYER, payload=_upload(transfer.id), storage=storage,
            transfer_repo=BrokenAttachRepository(), payment_repo=UndeletablePayments(),
        )

    assert await count(db, Payment) == 1
    assert any("reconciliation_required" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Revisión
# ---------------------------------------------------------------------------
async def _transfer_with_receipt(db, seed, storage):
    await seed.course(access_months=6)
    transfer = await seed.transfer()
    await upload_receipt(db, ctx=BUYER, payload=_upload(transfer.id), storage=storage)
    return transfer


@pytest.mark.asyncio
async def test_approve_completes_payment_and_enrolls(db, seed, storage, fetch, platform_admin):
    transfer = await _transfer_with_receipt(db, seed, storage)

    reviewed = await review_transfer(db, ctx=ADMIN, transfer_id=transfer.id, approve=True)

    assert reviewed.status == BankTransferStatus.APPROVED
    assert reviewed.reviewed_by == "admin-1"
    [payment] = await fetch(db, Payment, id=reviewed.payment_id)
    assert payment.status == PaymentStatus.COMPLETED
    assert payment.approved_at is not None
    [enrollment] = await fetch(db, CourseEnrollment, user_id="user-1", course_id="course-1")
    assert enrollment.status == EnrollmentStatus.ACTIVE

    with pytest.raises(InvalidState):
        await review_transfer(db, ctx=ADMIN, transfer_id=transfer.id, approve=False)


@pytest.mark.asyncio
async def test_reject_marks_payment_rejected(db, seed, storage, fetch, count, platform_admin):
    transfer = await _transfer_with_receipt(db, seed, storage)

    reviewed = await review_transfer(db, ctx=ADMIN, transfer_id=transfer.id, approve=False)

    assert reviewed.status == BankTransferStatus.REJECTED
    [payment] = await fetch(db, Payment, id=reviewed.payment_id)
    assert payment.status == PaymentStatus.REJECTED
    assert await count(db, CourseEnrollment) == 0


@pytest.mark.asyncio
async def test_review_requires_receipt(db, seed, platform_admin):
    transfer = await seed.transfer()

    with pytest.raises(InvalidState) as exc:
        await review_transfer(db, ctx=ADMIN, transfer_id=transfer.id, approve=True)
    assert exc.value.reason == "missing_receipt"


@pytest.mark.asyncio
async def test_buyer_cannot_review(db, seed, storage, platform_admin):
    transfer = await _transfer_with_receipt(db, seed, storage)

    with pytest.raises(Forbidden):
        await review_transfer(db, ctx=BUYER, transfer_id=transfer.id, approve=True)

# Fin del archivo backend/tests/modules/payments/facades/test_bank_transfer.py
