# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/checkout/dto.py

DTOs del flujo de checkout (MercadoPago / PayPal / inscripción gratuita).

Los bodies se aceptan en snake_case o camelCase; las respuestas se
serializan en camelCase.

Autor: Seencel
Fecha: 2026-09-25
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckoutRequest(_CamelModel):
    """
    Payload de entrada para iniciar un checkout.

    `user_id` se acepta solo por compatibilidad con clientes viejos y se
    ignora: el comprador siempre es el usuario de la sesión.
    """

    product_type: str = Field(default="course", description="course | subscription")
    product_id: str = Field(min_length=1, description="Id o slug del curso/plan.")
    currency: Optional[str] = Field(default=None, description="ISO-4217 (default por proveedor).")
    billing_period: Optional[str] = Field(default=None, description="monthly | annual (suscripciones).")
    organization_id: Optional[str] = None
    coupon_code: Optional[str] = None
    user_id: Optional[str] = Field(default=None, description="Ignorado.")


class CheckoutResponse(_CamelModel):
    redirect_url: str
    order_id: str


class FreeEnrollRequest(_CamelModel):
    course_id: str = Field(min_length=1)
    coupon_code: str = Field(min_length=1)


class FreeEnrollResponse(_CamelModel):
    success: bool = True
    enrollment_id: str


@dataclass(frozen=True)
class ProviderCheckoutHandle:
    """Lo que devuelve el proveedor al crear la orden/preferencia."""

    redirect_url: str
    order_id: str


__all__ = [
    "CheckoutRequest",
    "CheckoutResponse",
    "FreeEnrollRequest",
    "FreeEnrollResponse",
    "ProviderCheckoutHandle",
]

# Fin del archivo backend/app/modules/payments/facades/checkout/dto.py
