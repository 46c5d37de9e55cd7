# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Registry propio; /metrics lo concatena con el registry global HTTP.

Autor: Seencel
Fecha: 2026-09-24
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    generate_latest,
)
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

# Checkout
CHECKOUT_STARTED_TOTAL = Counter(
    "payments_checkout_started_total",
    "Número total de checkouts iniciados",
    ["provider", "currency"],
    registry=registry,
)
CHECKOUT_FAILED_TOTAL = Counter(
    "payments_checkout_failed_total",
    "Checkouts fallidos por proveedor y código de error",
    ["provider", "reason"],
    registry=registry,
)

# Webhooks
WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks recibidos por proveedor",
    ["provider"],
    registry=registry,
)
WEBHOOKS_REJECTED_TOTAL = Counter(
    "payments_webhook_rejected_total",
    "Total webhooks rechazados por proveedor y razón",
    ["provider", "reason"],
    registry=registry,
)

# Captura / fulfillment
CAPTURE_OUTCOME_TOTAL = Counter(
    "payments_capture_outcome_total",
    "Resultados del handler de captura (fulfilled/already_processed/...)",
    ["provider", "outcome"],
    registry=registry,
)
COMPENSATION_TOTAL = Counter(
    "payments_compensation_total",
    "Borrados compensatorios por tipo y resultado",
    ["kind", "result"],  # kind: fulfillment/bank_transfer  result: ok/failed
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Salida actual de las métricas de pagos en formato Prometheus."""
    return generate_latest(registry)


def increment_checkout(provider: str, currency: str) -> None:
    CHECKOUT_STARTED_TOTAL.labels(provider=provider, currency=currency).inc()


def observe_checkout_failed(provider: str, reason: str) -> None:
    CHECKOUT_FAILED_TOTAL.labels(provider=provider, reason=reason).inc()


def observe_webhook_received(provider: str) -> None:
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_rejected(provider: str, reason: str) -> None:
    """
    Registra webhook rechazado.

    Args:
        provider: mercadopago/paypal
        reason: invalid_secret/secret_not_configured/invalid_payload
    """
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()


def observe_capture_outcome(provider: str, outcome: str) -> None:
    CAPTURE_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    logger.debug("[Prometheus] Captura %s outcome=%s", provider, outcome)


def observe_compensation(kind: str, success: bool) -> None:
    COMPENSATION_TOTAL.labels(kind=kind, result="ok" if success else "failed").inc()


# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
