# backend/tests/modules/auth/test_authorization.py
import pytest

from app.shared.errors import Forbidden, NotFound, Unauthorized
from app.modules.auth.context import RequestContext
from app.modules.auth.dependencies import resolve_request_context
from app.modules.auth.security import create_access_token
from app.modules.auth.services import AuthorizationGate

CTX = RequestContext(auth_id="auth-user-1", user_id="user-1", email="ana@seencel.test", full_name="Ana María Pérez")


@pytest.mark.asyncio
async def test_org_admin_is_allowed(db, seed):
    await seed.organization("org-1")
    await seed.member("org-1", "user-1", role="Owner")

    await AuthorizationGate().require_org_admin(db, CTX, "org-1")


@pytest.mark.asyncio
async def test_member_without_admin_role_is_forbidden(db, seed):
    await seed.organization("org-1")
    await seed.member("org-1", "user-1", role="member")

    with pytest.raises(Forbidden) as exc:
        await AuthorizationGate().require_org_admin(db, CTX, "org-1")
    assert exc.value.reason == "not_admin"
    assert exc.value.status_code == 403


@pytest.mark.parametrize("is_active", [False, None])
@pytest.mark.asyncio
async def test_inactive_or_missing_membership_is_forbidden(db, seed, is_active):
    await seed.organization("org-1")
    if is_active is not None:
        await seed.member("org-1", "user-1", role="admin", is_active=is_active)

    with pytest.raises(Forbidden) as exc:
        await AuthorizationGate().require_org_admin(db, CTX, "org-1")
    assert exc.value.reason == "not_member"


@pytest.mark.asyncio
async def test_platform_admin_uses_configured_org(db, seed):
    await seed.organization("org-platform")
    await seed.member("org-platform", "user-1", role="admin")

    await AuthorizationGate().require_platform_admin(db, CTX)

    with pytest.raises(Forbidden):
        await AuthorizationGate(platform_admin_org_id="org-other").require_platform_admin(db, CTX)


@pytest.mark.asyncio
async def test_context_comes_from_verified_token(db, seed):
    await seed.user("user-1", auth_id="auth-user-1", full_name="Ana María Pérez")

    ctx = await resolve_request_context(db, create_access_token("auth-user-1"))

    assert ctx.user_id == "user-1"
    assert ctx.first_name == "Ana"
    assert ctx.last_name == "María Pérez"


@pytest.mark.asyncio
async def test_missing_or_invalid_token_is_unauthorized(db):
    with pytest.raises(Unauthorized):
        await resolve_request_context(db, None)
    with pytest.raises(Unauthorized) as exc:
        await resolve_request_context(db, "not-a-jwt")
    assert exc.value.reason == "invalid_token"


@pytest.mark.asyncio
async def test_token_without_profile_is_not_found(db):
    with pytest.raises(NotFound):
        await resolve_request_context(db, create_access_token("auth-ghost"))

# Fin del archivo backend/tests/modules/auth/test_authorization.py
