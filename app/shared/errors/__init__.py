# -*- coding: utf-8 -*-
"""
backend/app/shared/errors/__init__.py

Taxonomía de errores de dominio del backend de pagos.
"""

from .domain_errors import (
    PaymentsError,
    ValidationError,
    MissingProductReference,
    CouponRejected,
    FreeEnrollmentRequired,
    Unauthorized,
    Forbidden,
    NotFound,
    InvalidState,
    PricingUnavailable,
    InvalidPrice,
    ExchangeRateUnavailable,
    ProviderError,
    ProviderUnavailable,
    MetadataTooLong,
)

__all__ = [
    "PaymentsError",
    "ValidationError",
    "MissingProductReference",
    "CouponRejected",
    "FreeEnrollmentRequired",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "InvalidState",
    "PricingUnavailable",
    "InvalidPrice",
    "ExchangeRateUnavailable",
    "ProviderError",
    "ProviderUnavailable",
    "MetadataTooLong",
]
