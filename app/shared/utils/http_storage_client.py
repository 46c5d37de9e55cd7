# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/http_storage_client.py

Cliente HTTP para Supabase Storage usando httpx directamente.
Se usa para subir comprobantes de transferencias bancarias y obtener
su URL pública.

Autor: Seencel
Fecha: 2026-09-16
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.shared.config import get_settings
from app.shared.core.http_client_cache import get_http_client

logger = logging.getLogger(__name__)


class StorageUploadError(RuntimeError):
    """Fallo al subir un objeto a Storage."""


class SupabaseStorageHTTPClient:
    """
    Cliente HTTP para operaciones de Supabase Storage.

    Si no se inyecta `client`, usa el cliente httpx global compartido.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_role_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if base_url is None or service_role_key is None:
            settings = get_settings()
            base_url = base_url or settings.supabase_url
            if service_role_key is None and settings.supabase_service_role_key:
                service_role_key = settings.supabase_service_role_key.get_secret_value()
        if not base_url or not service_role_key:
            raise RuntimeError("Faltan variables de entorno para Supabase Storage")

        self.base_url = str(base_url).rstrip("/")
        self._service_role_key = service_role_key
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        return self._client or await get_http_client()

    async def upload_file(
        self,
        bucket: str,
        path: str,
        file_data: bytes,
        content_type: str = "application/octet-stream",
        overwrite: bool = False,
    ) -> Dict[str, Any]:
        """
        Sube un archivo a Supabase Storage.

        Args:
            bucket: Nombre del bucket
            path: Ruta completa del archivo en el bucket
            file_data: Contenido binario del archivo
            content_type: Tipo MIME del archivo
            overwrite: Si True, envía x-upsert para sobrescribir

        Raises:
            StorageUploadError: Si la operación falla
        """
        url = f"{self.base_url}/storage/v1/object/{bucket}/{path}"
        headers = {
            "Authorization": f"Bearer {self._service_role_key}",
            "Content-Type": content_type,
        }
        if overwrite:
            headers["x-upsert"] = "true"

        try:
            client = await self._get_client()
            response = await client.post(url, headers=headers, content=file_data)
        except httpx.RequestError as e:
            logger.error("Error de conexión al subir archivo %s: %s", path, e)
            raise StorageUploadError(f"Error de conexión: {e}") from e

        if response.status_code not in (200, 201):
            logger.error("Error al subir archivo %s: %s - %s", path, response.status_code, response.text[:300])
            raise StorageUploadError(f"Error al subir archivo a Supabase: {response.status_code}")

        logger.info("Archivo %s: %s/%s", "sobrescrito" if overwrite else "subido", bucket, path)
        return response.json() if response.content else {}

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"


__all__ = ["SupabaseStorageHTTPClient", "StorageUploadError"]

# Fin del archivo backend/app/shared/utils/http_storage_client.py
