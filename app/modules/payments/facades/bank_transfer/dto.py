# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/bank_transfer/dto.py

DTOs de transferencias bancarias.

Autor: Seencel
Fecha: 2026-09-27
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.payments.enums import BankTransferStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTransferRequest(_CamelModel):
    course_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    currency: str = Field(min_length=3, max_length=3)
    order_id: Optional[str] = None
    payer_name: Optional[str] = Field(default=None, max_length=200)
    payer_note: Optional[str] = None


class UploadReceiptRequest(_CamelModel):
    transfer_id: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    file_data_base64: str = Field(min_length=1, alias="fileDataBase64")


class UploadReceiptResponse(_CamelModel):
    success: bool = True
    receipt_url: str


class BankTransferOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    order_id: Optional[str] = None
    user_id: str
    course_id: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Decimal
    currency: str
    payer_name: Optional[str] = None
    payer_note: Optional[str] = None
    discount_percent: Decimal
    discount_amount: Decimal
    status: BankTransferStatus
    receipt_url: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


__all__ = [
    "CreateTransferRequest",
    "UploadReceiptRequest",
    "UploadReceiptResponse",
    "BankTransferOut",
]

# Fin del archivo backend/app/modules/payments/facades/bank_transfer/dto.py
