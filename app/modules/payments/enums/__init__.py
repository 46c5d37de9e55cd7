# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Autor: Seencel
Fecha: 2026-09-17
"""

from .bank_transfer_status_enum import BankTransferStatus
from .billing_period_enum import BillingPeriod
from .payment_provider_enum import PaymentProvider
from .payment_status_enum import PaymentStatus
from .product_type_enum import ProductType

__all__ = [
    "BankTransferStatus",
    "BillingPeriod",
    "PaymentProvider",
    "PaymentStatus",
    "ProductType",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
