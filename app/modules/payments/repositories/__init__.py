# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Autor: Seencel
Fecha: 2026-09-20
"""

from .payment_repository import PaymentRepository
from .payment_event_repository import PaymentEventRepository
from .bank_transfer_repository import BankTransferRepository

__all__ = ["PaymentRepository", "PaymentEventRepository", "BankTransferRepository"]

# Fin del archivo backend/app/modules/payments/repositories/__init__.py
