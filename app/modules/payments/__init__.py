# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos de Seencel.

Este módulo gestiona:
- Checkout con MercadoPago (preferencias) y PayPal (órdenes)
- Codecs del intent de compra que viaja por el proveedor
- Captura idempotente y fulfillment (inscripción / upgrade de plan)
- Transferencias bancarias con comprobante y revisión manual

Estructura:
- enums / models / repositories: persistencia
- codecs: serialización del CheckoutIntent
- providers: clientes HTTP de los proveedores
- facades: flujos de alto nivel (checkout, capture, bank_transfer)
- routes: endpoints FastAPI bajo /payments

Autor: Seencel
Fecha: 2026-09-17
"""

# Fin del archivo backend/app/modules/payments/__init__.py
