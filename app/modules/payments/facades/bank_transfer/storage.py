# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/bank_transfer/storage.py

Acceso a storage de comprobantes.

`ReceiptStorage` es el contrato mínimo que necesita la subida; en
producción lo implementa SupabaseStorageHTTPClient y los tests inyectan
un doble vía dependency_overrides.

Autor: Seencel
Fecha: 2026-09-27
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

from app.shared.utils.http_storage_client import SupabaseStorageHTTPClient


class ReceiptStorage(Protocol):
    async def upload_file(
        self,
        bucket: str,
        path: str,
        file_data: bytes,
        content_type: str = "application/octet-stream",
        overwrite: bool = False,
    ) -> Dict[str, Any]: ...

    def get_public_url(self, bucket: str, path: str) -> str: ...


def get_receipt_storage() -> ReceiptStorage:
    """Dependencia FastAPI."""
    return SupabaseStorageHTTPClient()


__all__ = ["ReceiptStorage", "get_receipt_storage"]

# Fin del archivo backend/app/modules/payments/facades/bank_transfer/storage.py
