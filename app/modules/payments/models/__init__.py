# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/__init__.py

Modelos ORM del módulo Payments.

Autor: Seencel
Fecha: 2026-09-19
"""

from .payment_models import Payment
from .payment_event_models import PaymentEvent
from .bank_transfer_models import BankTransferPayment

__all__ = ["Payment", "PaymentEvent", "BankTransferPayment"]

# Fin del archivo backend/app/modules/payments/models/__init__.py
