"""Azure Blob Storage access for catalog product images."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from azure.core.exceptions import ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from app.config import get_settings

# Blob names are unique per upload, so served images never change.
IMAGE_CACHE_CONTROL = "public, max-age=31536000, immutable"


def _storage_target() -> tuple[str, str]:
    settings = get_settings()
    connection_string = settings.azure_storage_connection_string
    container_name = settings.azure_storage_container_name
    if not connection_string or not container_name:
        raise RuntimeError("El almacenamiento de imágenes no está configurado")
    return connection_string, container_name


@lru_cache
def _container_for(connection_string: str, container_name: str) -> ContainerClient:
    service = BlobServiceClient.from_connection_string(connection_string)
    try:
        service.create_container(container_name, public_access="blob")
    except ResourceExistsError:
        pass
    return service.get_container_client(container_name)


def upload_blob(
    blob_path: str,
    data: bytes,
    *,
    content_type: Optional[str] = None,
) -> str:
    """Store ``data`` at ``blob_path`` and return the blob's public URL.

    Raises :class:`RuntimeError` when storage is not configured; transport and
    service failures propagate as :class:`azure.core.exceptions.AzureError`.
    """

    container = _container_for(*_storage_target())
    blob = container.get_blob_client(blob_path)
    blob.upload_blob(
        data,
        overwrite=False,
        content_settings=ContentSettings(
            content_type=content_type or "application/octet-stream",
            cache_control=IMAGE_CACHE_CONTROL,
        ),
    )
    return blob.url


__all__ = ["IMAGE_CACHE_CONTROL", "upload_blob"]
