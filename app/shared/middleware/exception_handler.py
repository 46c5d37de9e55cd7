# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Manejo centralizado de errores HTTP:
- Handler para PaymentsError → JSON `{error, status, reason?, ...}`
- Middleware ASGI para excepciones no manejadas → JSON 500 con request_id

Autor: Seencel
Fecha: 2026-09-16
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.shared.errors import PaymentsError, Unauthorized

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ["x-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


async def payments_error_handler(request: Request, exc: PaymentsError) -> JSONResponse:
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(
        level,
        "domain_error path=%s error=%s status=%s reason=%s",
        request.url.path,
        exc.error,
        exc.status_code,
        exc.reason,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Errores de esquema del body/query con el mismo formato que ValidationError (400)."""
    logger.warning("request_validation_error path=%s errors=%d", request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "status": 400,
            "message": "Solicitud inválida",
            "details": jsonable_encoder(exc.errors()),
        },
    )


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Captura excepciones no manejadas y devuelve JSON 500 con request_id
    (nunca text/plain).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            return JSONResponse(
                status_code=500,
                content={"error": "internal_error", "status": 500, "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentsError, payments_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_middleware(JSONExceptionMiddleware)


__all__ = [
    "JSONExceptionMiddleware",
    "get_request_id",
    "payments_error_handler",
    "request_validation_handler",
    "register_exception_handlers",
]

# Fin del archivo backend/app/shared/middleware/exception_handler.py
