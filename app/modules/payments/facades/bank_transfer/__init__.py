# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/bank_transfer/__init__.py

Flujo manual de pago por transferencia bancaria.

Autor: Seencel
Fecha: 2026-09-27
"""

from .dto import BankTransferOut, CreateTransferRequest, UploadReceiptRequest, UploadReceiptResponse
from .storage import ReceiptStorage, get_receipt_storage
from .transfers import create_transfer, get_transfer, review_transfer
from .upload_receipt import upload_receipt

__all__ = [
    "BankTransferOut",
    "CreateTransferRequest",
    "UploadReceiptRequest",
    "UploadReceiptResponse",
    "ReceiptStorage",
    "get_receipt_storage",
    "create_transfer",
    "get_transfer",
    "review_transfer",
    "upload_receipt",
]

# Fin del archivo backend/app/modules/payments/facades/bank_transfer/__init__.py
