# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/services/authorization_gate.py

Verificaciones de rol sobre organizaciones.

- require_org_admin: el actor debe ser miembro activo con rol administrativo.
  Miembro sin rol → Forbidden (nunca Unauthorized: la sesión es válida).
- require_platform_admin: administradores de la organización plataforma
  (revisión de transferencias bancarias).

Autor: Seencel
Fecha: 2026-09-21
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import get_payments_settings
from app.shared.errors import Forbidden
from app.modules.auth.context import RequestContext
from app.modules.auth.repositories import MembershipRepository

logger = logging.getLogger(__name__)


class AuthorizationGate:
    def __init__(
        self,
        admin_roles: Optional[Iterable[str]] = None,
        platform_admin_org_id: Optional[str] = None,
    ) -> None:
        settings = get_payments_settings()
        self.admin_roles = frozenset(
            r.lower() for r in (admin_roles if admin_roles is not None else settings.admin_roles)
        )
        self.platform_admin_org_id = platform_admin_org_id or settings.platform_admin_org_id

    async def require_org_admin(
        self,
        session: AsyncSession,
        ctx: RequestContext,
        organization_id: str,
    ) -> None:
        membership = await MembershipRepository(session).get_active_membership(
            organization_id, ctx.user_id
        )
        if membership is None:
            logger.info("Acceso denegado: user=%s no es miembro de org=%s", ctx.user_id, organization_id)
            raise Forbidden("No eres miembro de esta organización", reason="not_member")

        if (membership.role or "").strip().lower() not in self.admin_roles:
            logger.info(
                "Acceso denegado: user=%s rol=%s sin permisos en org=%s",
                ctx.user_id,
                membership.role,
                organization_id,
            )
            raise Forbidden("Se requiere rol de administrador", reason="not_admin")

    async def require_platform_admin(self, session: AsyncSession, ctx: RequestContext) -> None:
        if not self.platform_admin_org_id:
            logger.error("PLATFORM_ADMIN_ORG_ID no configurado; revisión de transferencias deshabilitada")
            raise Forbidden("Revisión no disponible", reason="admin_not_configured")
        await self.require_org_admin(session, ctx, self.platform_admin_org_id)


__all__ = ["AuthorizationGate"]

# Fin del archivo backend/app/modules/auth/services/authorization_gate.py
