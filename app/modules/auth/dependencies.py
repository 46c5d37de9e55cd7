# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: valida el token y devuelve el auth_id (claim 'sub')
- get_request_context: resuelve el perfil y arma el RequestContext

Autor: Seencel
Fecha: 2026-09-21
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.shared.errors import NotFound, Unauthorized
from app.modules.auth.context import RequestContext
from app.modules.auth.repositories import UserRepository
from .security import bearer_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


def validate_jwt_token(token: str) -> str:
    """
    Valida un JWT y extrae el auth_id.

    Raises:
        Unauthorized: Si el token es inválido o expirado.
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        raise Unauthorized(str(e), reason="invalid_token") from e
    return str(payload["sub"])


async def resolve_request_context(session: AsyncSession, token: Optional[str]) -> RequestContext:
    if not token:
        raise Unauthorized("Falta el token de sesión", reason="missing_token")

    auth_id = validate_jwt_token(token)
    user = await UserRepository(session).get_by_auth_id(auth_id)
    if user is None:
        logger.warning("Token válido sin perfil asociado (auth_id=%s)", auth_id)
        raise NotFound("Perfil de usuario no encontrado", reason="user_profile")

    return RequestContext(
        auth_id=auth_id,
        user_id=user.id,
        email=user.email,
        full_name=user.full_name,
    )


async def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_async_session),
) -> RequestContext:
    """
    Dependencia para endpoints protegidos: Authorization: Bearer <token>.
    """
    token = credentials.credentials if credentials else None
    return await resolve_request_context(session, token)


__all__ = ["validate_jwt_token", "resolve_request_context", "get_request_context"]

# Fin del archivo backend/app/modules/auth/dependencies.py
