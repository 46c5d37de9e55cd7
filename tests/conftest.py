# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del backend de pagos.

- Variables de entorno mínimas ANTES de importar la app (los settings
  son singletons).
- SQLite (aiosqlite) en archivo temporal por test, con el esquema
  completo creado desde los modelos.
- Dobles de proveedores vía httpx.MockTransport: se usan los clientes
  reales de MercadoPago / PayPal, solo cambia el transporte.
- Cliente HTTP contra la app con ASGITransport.
"""

import os
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas
# -----------------------------------------------------------------------------
os.environ.setdefault("PYTHON_ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-for-payments-suite-0123456789")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("PAYMENTS_WEBHOOK_SECRET", "whsec-test")
os.environ.setdefault("PAYMENTS_WEBHOOK_BASE_URL", "https://api.seencel.test")
os.environ.setdefault("PAYMENTS_RETURN_BASE_URL", "https://api.seencel.test")
os.environ.setdefault("FRONTEND_URL", "https://app.seencel.test")
os.environ.setdefault("MP_ACCESS_TOKEN", "TEST-0000000000000000-000000-test")
os.environ.setdefault("MP_API_BASE", "https://mp.test")
os.environ.setdefault("PAYPAL_CLIENT_ID", "paypal-client")
os.environ.setdefault("PAYPAL_CLIENT_SECRET", "paypal-secret")
os.environ.setdefault("PAYPAL_API_BASE", "https://paypal.test")
os.environ.setdefault("PLATFORM_ADMIN_ORG_ID", "org-platform")
os.environ.setdefault("SUPABASE_URL", "https://storage.seencel.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test")
os.environ.setdefault("HTTP_METRICS_ENABLED", "false")

from app.shared.database import Base  # noqa: E402
from app.shared.database import database as database_module  # noqa: E402
from app.shared.orm import import_all_models  # noqa: E402


# -----------------------------------------------------------------------------
# 1) Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine(tmp_path, monkeypatch):
    import_all_models()
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}", poolclass=NullPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(bind=eng, expire_on_commit=False, autoflush=False)
    monkeypatch.setattr(database_module, "_engine", eng)
    monkeypatch.setattr(database_module, "_sessionmaker", maker)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db(engine):
    async with database_module.get_sessionmaker()() as session:
        yield session


async def fetch_all(session, model, **filters):
    """Lectura fresca (ignora el identity map) para verificar efectos."""
    stmt = select(model).filter_by(**filters).execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_rows(session, model, **filters) -> int:
    stmt = select(func.count()).select_from(model).filter_by(**filters)
    return int((await session.execute(stmt)).scalar_one())


@pytest.fixture
def fetch():
    return fetch_all


@pytest.fixture
def count():
    return count_rows


# -----------------------------------------------------------------------------
# 2) Datos de catálogo / identidad
# -----------------------------------------------------------------------------
class Seeder:
    def __init__(self, session):
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def user(self, user_id: str = "user-1", auth_id: Optional[str] = None, **kw):
        from app.modules.auth.models import User
        return await self._add(User(
            id=user_id,
            auth_id=auth_id or f"auth-{user_id}",
            email=kw.pop("email", f"{user_id}@seencel.test"),
            full_name=kw.pop("full_name", "Ana Pérez"),
            **kw,
        ))

    async def course(self, course_id: str = "course-1", *, slug: str = "curso-revit", price="100.00", **kw):
        from app.modules.catalog.models import Course
        return await self._add(Course(
            id=course_id,
            slug=slug,
            title=kw.pop("title", "Curso de Revit"),
            price=Decimal(price) if price is not None else None,
            access_months=kw.pop("access_months", 12),
            is_active=kw.pop("is_active", True),
            **kw,
        ))

    async def plan(self, plan_id: str = "plan-pro", *, slug: str = "pro", monthly="20.00", annual="200.00"):
        from app.modules.catalog.models import Plan
        return await self._add(Plan(
            id=plan_id,
            slug=slug,
            name="Plan Pro",
            monthly_amount=Decimal(monthly) if monthly is not None else None,
            annual_amount=Decimal(annual) if annual is not None else None,
            is_active=True,
        ))

    async def rate(self, to_currency: str, rate, from_currency: str = "USD", is_active: bool = True):
        from app.modules.catalog.models import ExchangeRate
        return await self._add(ExchangeRate(
            from_currency=from_currency,
            to_currency=to_currency,
            rate=Decimal(str(rate)),
            is_active=is_active,
        ))

    async def coupon(self, code: str, *, discount_type: str = "percent", amount="20", **kw):
        from app.modules.coupons.enums import DiscountType
        from app.modules.coupons.models import Coupon
        return await self._add(Coupon(
            code=code.upper(),
            discount_type=DiscountType(discount_type),
            amount=Decimal(str(amount)),
            applies_to_all=kw.pop("applies_to_all", True),
            per_user_limit=kw.pop("per_user_limit", 1),
            is_active=kw.pop("is_active", True),
            **kw,
        ))

    async def organization(self, org_id: str = "org-1", *, plan_id: Optional[str] = None):
        from app.modules.organizations.models import Organization
        return await self._add(Organization(id=org_id, name=f"Org {org_id}", plan_id=plan_id))

    async def member(self, org_id: str, user_id: str, role: str = "admin", is_active: bool = True):
        from app.modules.organizations.models import OrganizationMember
        return await self._add(OrganizationMember(
            organization_id=org_id, user_id=user_id, role=role, is_active=is_active,
        ))

    async def transfer(self, *, user_id: str = "user-1", course_id: Optional[str] = "course-1", **kw):
        from app.modules.payments.enums import BankTransferStatus
        from app.modules.payments.models import BankTransferPayment
        return await self._add(BankTransferPayment(
            user_id=user_id,
            course_id=course_id,
            order_id=kw.pop("order_id", None),
            amount=Decimal(str(kw.pop("amount", "95.00"))),
            currency=kw.pop("currency", "USD"),
            status=kw.pop("status", BankTransferStatus.PENDING),
            payment_id=kw.pop("payment_id", None),
            **kw,
        ))


@pytest.fixture
def seed(db):
    return Seeder(db)


# -----------------------------------------------------------------------------
# 3) Dobles de proveedores (httpx.MockTransport)
# -----------------------------------------------------------------------------
Responder = Callable[[httpx.Request], httpx.Response]


class FakeProviderAPI:
    """
    Enrutador mínimo para MockTransport: (método, path) → respuesta.
    Registra cada request recibida.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, response: Any = None, *, status: int = 200) -> None:
        if callable(response):
            self.routes[(method.upper(), path)] = response
        else:
            self.routes[(method.upper(), path)] = (status, response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body if body is not None else {})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]


@pytest.fixture
async def mp_api():
    api = FakeProviderAPI()
    yield api


@pytest.fixture
async def paypal_api():
    from app.modules.payments.providers import clear_token_cache

    clear_token_cache()
    api = FakeProviderAPI()
    api.on("POST", "/v1/oauth2/token", {"access_token": "pp-token", "expires_in": 3600})
    yield api
    clear_token_cache()


@pytest.fixture
async def mp_client(mp_api):
    from app.modules.payments.providers import MercadoPagoClient

    async with mp_api.client() as http:
        yield MercadoPagoClient(client=http)


@pytest.fixture
async def paypal_client(paypal_api):
    from app.modules.payments.providers import PayPalClient

    async with paypal_api.client() as http:
        yield PayPalClient(client=http)


class FakeReceiptStorage:
    def __init__(self) -> None:
        self.uploads: List[Dict[str, Any]] = []
        self.fail = False

    async def upload_file(self, bucket, path, file_data, content_type="application/octet-stream", overwrite=False):
        from app.shared.utils.http_storage_client import StorageUploadError

        if self.fail:
            raise StorageUploadError("storage caído")
        self.uploads.append({
            "bucket": bucket, "path": path, "data": file_data,
            "content_type": content_type, "overwrite": overwrite,
        })
        return {"Key": f"{bucket}/{path}"}

    def get_public_url(self, bucket, path):
        return f"https://storage.seencel.test/public/{bucket}/{path}"


@pytest.fixture
def storage():
    return FakeReceiptStorage()


# -----------------------------------------------------------------------------
# 4) App FastAPI + cliente HTTP
# -----------------------------------------------------------------------------
@pytest.fixture
def app(engine, mp_client, paypal_client, storage):
    from app.main import app as fastapi_app
    from app.modules.payments.facades.bank_transfer import get_receipt_storage
    from app.modules.payments.providers import get_mercadopago_client, get_paypal_client

    fastapi_app.dependency_overrides[get_mercadopago_client] = lambda: mp_client
    fastapi_app.dependency_overrides[get_paypal_client] = lambda: paypal_client
    fastapi_app.dependency_overrides[get_receipt_storage] = lambda: storage
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def auth_headers():
    from app.modules.auth.security import create_access_token

    def _headers(auth_id: str = "auth-user-1") -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(auth_id)}"}

    return _headers

# Fin del archivo backend/tests/conftest.py
