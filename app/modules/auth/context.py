# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/context.py

Contexto explícito por request. Se construye una vez desde la sesión
verificada y se pasa a cada componente; nunca se lee identidad del body.

Autor: Seencel
Fecha: 2026-09-21
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """Identidad autenticada del request."""

    auth_id: str
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def first_name(self) -> Optional[str]:
        parts = (self.full_name or "").split()
        return parts[0] if parts else None

    @property
    def last_name(self) -> Optional[str]:
        parts = (self.full_name or "").split()
        return " ".join(parts[1:]) if len(parts) > 1 else None


__all__ = ["RequestContext"]
