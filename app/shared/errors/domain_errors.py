# -*- coding: utf-8 -*-
"""
backend/app/shared/errors/domain_errors.py

Excepciones de dominio con su código HTTP asociado.

Los servicios y facades lanzan estas excepciones; la capa HTTP las
traduce a `{error, status, reason?, freeEnrollment?, couponCode?}`
mediante el handler registrado en app.shared.middleware.exception_handler.

"Ya procesado" NO es una excepción: es un outcome de captura (200).

Autor: Seencel
Fecha: 2026-09-16
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PaymentsError(Exception):
    """Raíz de la taxonomía de errores de dominio."""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str = "", *, reason: Optional[str] = None):
        super().__init__(message or self.error)
        self.message = message or self.error
        self.reason = reason

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "status": self.status_code, "message": self.message}
        if self.reason:
            body["reason"] = self.reason
        return body


# ------------------------------------------------------------------ #
# 4xx: entrada / identidad / estado
# ------------------------------------------------------------------ #
class ValidationError(PaymentsError):
    """Entrada faltante o malformada."""
    status_code = 400
    error = "validation_error"


class MissingProductReference(ValidationError):
    """La transferencia no tiene curso resoluble."""
    error = "missing_product_reference"


class CouponRejected(ValidationError):
    """El cupón no aplica para esta compra."""
    error = "coupon_rejected"


class FreeEnrollmentRequired(ValidationError):
    """El cupón otorga acceso gratuito: usar el flujo de inscripción gratuita."""
    error = "free_enrollment"

    def __init__(self, coupon_code: str, message: str = "El cupón otorga acceso gratuito"):
        super().__init__(message, reason="free_enrollment")
        self.coupon_code = coupon_code

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["freeEnrollment"] = True
        body["couponCode"] = self.coupon_code
        return body


class Unauthorized(PaymentsError):
    """Sesión ausente, inválida o expirada."""
    status_code = 401
    error = "unauthorized"


class Forbidden(PaymentsError):
    """Sesión válida pero sin permisos suficientes."""
    status_code = 403
    error = "forbidden"


class NotFound(PaymentsError):
    """Recurso inexistente o ajeno al usuario."""
    status_code = 404
    error = "not_found"


class InvalidState(PaymentsError):
    """Operación no permitida en el estado actual del recurso."""
    status_code = 409
    error = "invalid_state"


# ------------------------------------------------------------------ #
# 5xx: catálogo / configuración
# ------------------------------------------------------------------ #
class PricingUnavailable(PaymentsError):
    """Precio o tipo de cambio no disponible (defecto de catálogo)."""
    status_code = 500
    error = "pricing_unavailable"


class InvalidPrice(PricingUnavailable):
    """Precio ausente, no finito o no positivo."""
    error = "invalid_price"


class ExchangeRateUnavailable(PricingUnavailable):
    """No hay tipo de cambio activo USD→moneda destino."""
    error = "exchange_rate_unavailable"


class MetadataTooLong(PaymentsError):
    """El intent no cabe en el campo de correlación del proveedor."""
    status_code = 500
    error = "metadata_too_long"


# ------------------------------------------------------------------ #
# Proveedores externos
# ------------------------------------------------------------------ #
class ProviderError(PaymentsError):
    """El proveedor rechazó la solicitud."""
    status_code = 502
    error = "provider_error"

    def __init__(
        self,
        message: str = "",
        *,
        provider: Optional[str] = None,
        provider_status: Optional[int] = None,
        provider_body: Any = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message, reason=reason)
        self.provider = provider
        self.provider_status = provider_status
        self.provider_body = provider_body
        # 4xx del proveedor se reflejan tal cual; el resto como 502
        if provider_status is not None and 400 <= provider_status < 500:
            self.status_code = provider_status

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.provider:
            body["provider"] = self.provider
        if self.provider_status is not None:
            body["providerStatus"] = self.provider_status
        if isinstance(self.provider_body, (dict, list)):
            body["details"] = self.provider_body
        return body


class ProviderUnavailable(PaymentsError):
    """Timeout o error de red hablando con el proveedor."""
    status_code = 504
    error = "provider_unavailable"


# Fin del archivo backend/app/shared/errors/domain_errors.py
