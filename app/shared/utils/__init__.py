# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades compartidas (cliente HTTP de Supabase Storage).

Autor: Seencel
Fecha: 2026-09-22
"""

from .http_storage_client import SupabaseStorageHTTPClient, StorageUploadError

__all__ = ["SupabaseStorageHTTPClient", "StorageUploadError"]

# Fin del archivo backend/app/shared/utils/__init__.py
