# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Fachadas del módulo Payments.

Este __init__ no importa submódulos para evitar ciclos; cada flujo se
importa desde su paquete:

    from app.modules.payments.facades.checkout import start_checkout, free_enroll
    from app.modules.payments.facades.capture import FulfillmentHandler, process_mercadopago_webhook
    from app.modules.payments.facades.bank_transfer import create_transfer, upload_receipt

Autor: Seencel
Fecha: 2026-09-20
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
