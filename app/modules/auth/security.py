# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/security.py

Módulo de seguridad para Auth:
- Esquema HTTP Bearer
- Decodificación / validación de JWT emitidos por el proveedor de sesión
- Creación de JWT (utilidades de desarrollo y pruebas)

Autor: Seencel
Fecha: 2026-09-21
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.security import HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt  # pip install "python-jose[cryptography]"

from app.shared.config import get_settings

# auto_error=False: la ausencia de token se reporta como Unauthorized de dominio
bearer_scheme = HTTPBearer(auto_error=False)


class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """Crea un JWT con claim 'sub' (auth_id) y metadatos opcionales."""
    settings = get_settings()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=60))
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    settings = get_settings()
    options = {"verify_aud": bool(settings.jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except ExpiredSignatureError as e:
        raise TokenDecodeError("Token expirado") from e
    except JWTError as e:
        raise TokenDecodeError("Token inválido") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload
# Fin del archivo backend/app/modules/auth/security.py
