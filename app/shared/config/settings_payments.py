# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pagos para el backend de Seencel.

Descripción:
    Centraliza credenciales de proveedores (MercadoPago / PayPal),
    URLs públicas de retorno y webhook, límites del codec de metadata
    y parámetros de transferencias bancarias.

Autor: Seencel
Fecha: 2026-09-14
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PAYPAL_SANDBOX_API_BASE = "https://api-m.sandbox.paypal.com"
PAYPAL_LIVE_API_BASE = "https://api-m.paypal.com"


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    # =========================================================================
    # MERCADOPAGO
    # =========================================================================

    mp_access_token: Optional[SecretStr] = Field(
        default=None,
        description="Access token de MercadoPago (APP_USR-... o TEST-...)"
    )

    mp_api_base: str = Field(
        default="https://api.mercadopago.com",
        description="URL base de la API de MercadoPago"
    )

    # =========================================================================
    # PAYPAL
    # =========================================================================

    paypal_client_id: Optional[str] = Field(
        default=None,
        description="PayPal client ID"
    )

    paypal_client_secret: Optional[SecretStr] = Field(
        default=None,
        description="PayPal client secret"
    )

    paypal_env: str = Field(
        default="sandbox",
        description="Modo de PayPal: 'sandbox' o 'live'"
    )

    paypal_api_base: Optional[str] = Field(
        default=None,
        description="Override de la URL base de PayPal (si vacío se deriva de paypal_env)"
    )

    paypal_brand_name: str = Field(
        default="Seencel",
        description="Nombre comercial mostrado en el checkout de PayPal"
    )

    # =========================================================================
    # URLS PÚBLICAS / WEBHOOKS
    # =========================================================================

    payments_webhook_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto compartido que viaja como ?secret= en la URL del webhook"
    )

    payments_webhook_base_url: str = Field(
        default="http://localhost:8000",
        description="URL pública del backend para notificaciones de proveedores"
    )

    payments_return_base_url: str = Field(
        default="http://localhost:8000",
        description="URL pública del backend para los redirects de captura"
    )

    frontend_url: str = Field(
        default="http://localhost:5173",
        description="URL del frontend (link de regreso a facturación)"
    )

    # =========================================================================
    # PROVEEDORES: HTTP Y METADATA
    # =========================================================================

    payments_provider_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout de llamadas HTTP a proveedores (segundos)"
    )

    payments_metadata_max_length: int = Field(
        default=127,
        description="Longitud máxima de custom_id/invoice_id (PayPal)"
    )

    mp_external_reference_max_length: int = Field(
        default=256,
        description="Longitud máxima del external_reference de MercadoPago"
    )

    payments_statement_descriptor: str = Field(
        default="SEENCEL",
        description="Descriptor en el resumen de tarjeta (MercadoPago)"
    )

    # =========================================================================
    # AUTORIZACIÓN
    # =========================================================================

    org_admin_roles: str = Field(
        default="admin,owner,administrador",
        description="Roles (separados por coma) con permisos de administración"
    )

    platform_admin_org_id: Optional[str] = Field(
        default=None,
        description="Organización cuyos administradores revisan transferencias"
    )

    # =========================================================================
    # TRANSFERENCIAS BANCARIAS / INSCRIPCIÓN GRATUITA
    # =========================================================================

    bank_transfer_bucket: str = Field(
        default="bank-transfer-receipts",
        description="Bucket de storage para comprobantes"
    )

    bank_transfer_discount_percent: Decimal = Field(
        default=Decimal("5.0"),
        description="Descuento aplicado a pagos por transferencia"
    )

    free_enrollment_days: int = Field(
        default=365,
        description="Duración de la inscripción otorgada por cupón gratuito"
    )

    @field_validator("paypal_env", mode="before")
    @classmethod
    def _normalize_paypal_env(cls, v: Optional[str]) -> str:
        v = (v or "sandbox").strip().lower()
        if v not in ("sandbox", "live"):
            raise ValueError("PAYPAL_ENV debe ser 'sandbox' o 'live'")
        return v

    # =========================================================================
    # HELPERS
    # =========================================================================

    @property
    def paypal_base_url(self) -> str:
        if self.paypal_api_base:
            return self.paypal_api_base.rstrip("/")
        return PAYPAL_LIVE_API_BASE if self.paypal_env == "live" else PAYPAL_SANDBOX_API_BASE

    @property
    def admin_roles(self) -> frozenset[str]:
        return frozenset(r.strip().lower() for r in self.org_admin_roles.split(",") if r.strip())

    @property
    def webhook_secret(self) -> str:
        return self.payments_webhook_secret.get_secret_value() if self.payments_webhook_secret else ""

    @property
    def billing_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/billing"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "PAYPAL_SANDBOX_API_BASE",
    "PAYPAL_LIVE_API_BASE",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
