# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Contadores Prometheus del módulo de pagos.

Autor: Seencel
Fecha: 2026-09-24
"""

from .exporters.prometheus_exporter import (
    registry,
    render_prometheus_metrics,
    increment_checkout,
    observe_checkout_failed,
    observe_webhook_received,
    observe_webhook_rejected,
    observe_capture_outcome,
    observe_compensation,
)

__all__ = [
    "registry",
    "render_prometheus_metrics",
    "increment_checkout",
    "observe_checkout_failed",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_capture_outcome",
    "observe_compensation",
]

# Fin del archivo backend/app/modules/payments/metrics/__init__.py
