# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/capture/pages.py

Páginas HTML de resultado para los redirects de captura. Son destino de
navegación del comprador, no una API JSON; todas enlazan a facturación.

Autor: Seencel
Fecha: 2026-09-26
"""

from __future__ import annotations

from html import escape

from .dto import CaptureOutcome, CaptureResult

_PAGE = """<!DOCTYPE html>
<html lang="es">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>
body{{font-family:system-ui,-apple-system,sans-serif;background:#f6f7f9;margin:0;display:flex;min-height:100vh;align-items:center;justify-content:center}}
.card{{background:#fff;border-radius:12px;box-shadow:0 4px 24px rgba(0,0,0,.08);padding:40px;max-width:440px;text-align:center}}
h1{{font-size:22px;color:{color};margin:0 0 12px}}
p{{color:#4b5563;line-height:1.5}}
a{{display:inline-block;margin-top:20px;padding:10px 20px;background:#111827;color:#fff;border-radius:8px;text-decoration:none}}
</style>
</head>
<body>
<div class="card">
<h1>{title}</h1>
<p>{message}</p>
<a href="{billing_url}">Volver a facturación</a>
</div>
</body>
</html>
"""

_SUCCESS = ("Pago confirmado", "Tu compra fue procesada correctamente. Ya puedes acceder a tu contenido.", "#15803d")
_PROCESSING = ("Pago recibido, procesando", "Recibimos tu pago y lo estamos procesando. Se activará en unos minutos.", "#b45309")
_PENDING = ("Pago pendiente/rechazado", "El proveedor aún no aprobó el pago o fue rechazado.", "#b45309")
_FAILED = ("No pudimos completar tu compra", "Hubo un problema procesando el pago. Si se realizó un cobro, contáctanos.", "#b91c1c")


def render_page(title: str, message: str, color: str, billing_url: str) -> str:
    return _PAGE.format(
        title=escape(title),
        message=escape(message),
        color=color,
        billing_url=escape(billing_url, quote=True),
    )


def render_capture_result(result: CaptureResult, billing_url: str) -> tuple[str, int]:
    """HTML y status HTTP para un resultado de captura."""
    if result.outcome in (CaptureOutcome.FULFILLED, CaptureOutcome.ALREADY_PROCESSED):
        return render_page(*_SUCCESS, billing_url), 200
    if result.outcome == CaptureOutcome.METADATA_MISSING:
        return render_page(*_PROCESSING, billing_url), 200
    if result.outcome == CaptureOutcome.NOT_APPROVED:
        return render_page(*_PENDING, billing_url), 200
    return render_page(*_FAILED, billing_url), 502


def render_error(message: str, billing_url: str, status_code: int) -> tuple[str, int]:
    return render_page(_FAILED[0], message, _FAILED[2], billing_url), status_code


__all__ = ["render_capture_result", "render_error", "render_page"]

# Fin del archivo backend/app/modules/payments/facades/capture/pages.py
