# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/dto.py

Tipos del flujo de captura.

ProviderCapture es la vista normalizada (y acotada) de una confirmación
de pago del proveedor: todo campo puede faltar y "ausente" es un
resultado válido, no un error.

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from app.modules.payments.codecs import CheckoutIntent
from app.modules.payments.enums import PaymentProvider


class ProviderCapture(BaseModel):
    """Confirmación de pago normalizada para MercadoPago o PayPal."""

    provider: PaymentProvider = Field(description="Proveedor de pago origen")
    provider_payment_id: Optional[str] = Field(
        default=None,
        description="ID del pago/captura en el proveedor (clave de idempotencia)",
    )
    status: str = Field(default="unknown", description="Estado original del proveedor")
    approved: bool = Field(default=False, description="¿El pago está aprobado/completado?")

    amount: Optional[Decimal] = None
    currency: Optional[str] = None

    correlation: Optional[str] = Field(
        default=None,
        description="custom_id (PayPal) o external_reference (MercadoPago)",
    )
    secondary_correlation: Optional[str] = Field(default=None, description="invoice_id (PayPal)")
    order_id: Optional[str] = Field(default=None, description="Orden PayPal / merchant_order MP")

    event_type: str = Field(default="capture", description="Tipo de evento o canal de entrada")
    event_id: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict, description="Payload original completo")


class CaptureOutcome(StrEnum):
    FULFILLED = "fulfilled"
    ALREADY_PROCESSED = "already_processed"
    METADATA_MISSING = "metadata_missing"
    NOT_APPROVED = "not_approved"
    FAILED = "failed"

    @property
    def is_success(self) -> bool:
        return self in (CaptureOutcome.FULFILLED, CaptureOutcome.ALREADY_PROCESSED)


@dataclass(frozen=True)
class CaptureResult:
    outcome: CaptureOutcome
    payment_id: Optional[str] = None
    message: str = ""
    provider_payment_id: Optional[str] = None


IntentResolver = Callable[[ProviderCapture], Optional[CheckoutIntent]]


__all__ = ["ProviderCapture", "CaptureOutcome", "CaptureResult", "IntentResolver"]

# Fin del archivo backend/app/modules/payments/facades/capture/dto.py
