"""Upload of the product images referenced by a bulk upload spreadsheet."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from azure.core.exceptions import AzureError

from app.config import get_settings
from app.domain.entities import ImageUploadResult, UploadedImage, User
from app.infrastructure.storage import upload_blob
from app.utils import now_in_app_timezone

from .access import ensure_admin
from .errors import BulkUploadInputError

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "carga-masiva"
ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
}
_EXTENSION_BY_TYPE = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


@dataclass
class IncomingImage:
    """An image file received from the operator."""

    file_name: str
    content_type: str | None
    data: bytes


def _validate_image(image: IncomingImage, max_bytes: int) -> str | None:
    if (image.content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        return "Tipo de archivo no válido. Use JPG, PNG, GIF o WebP."
    if len(image.data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        return f"El archivo es demasiado grande. Máximo {limit_mb}MB."
    return None


def _build_blob_path(image: IncomingImage) -> str:
    extension = Path(image.file_name).suffix.lstrip(".").lower()
    if not extension:
        extension = _EXTENSION_BY_TYPE[(image.content_type or "").lower()]
    timestamp = int(now_in_app_timezone().timestamp() * 1000)
    return f"{IMAGE_FOLDER}/{timestamp}-{secrets.token_hex(4)}.{extension}"


def upload_bulk_images(
    *, user: User, files: Sequence[IncomingImage]
) -> ImageUploadResult:
    """Store every acceptable image and report the rejected ones.

    Raises :class:`BulkUploadInputError` when no file was received, too many
    files were sent or none of them could be stored.
    """

    ensure_admin(user)
    settings = get_settings()

    if not files:
        raise BulkUploadInputError("No se recibieron imágenes")
    if len(files) > settings.bulk_upload_max_images:
        raise BulkUploadInputError(
            f"Máximo {settings.bulk_upload_max_images} imágenes por carga"
        )

    result = ImageUploadResult()
    for image in files:
        problem = _validate_image(image, settings.bulk_upload_max_image_bytes)
        if problem:
            result.errors.append(f"{image.file_name}: {problem}")
            continue

        try:
            url = upload_blob(
                _build_blob_path(image), image.data, content_type=image.content_type
            )
        except AzureError as exc:
            logger.warning("No se pudo subir la imagen %s: %s", image.file_name, exc)
            result.errors.append(f"{image.file_name}: Error al subir la imagen")
            continue

        result.images.append(
            UploadedImage(file_name=image.file_name, url=url, size=len(image.data))
        )

    if not result.images and result.errors:
        raise BulkUploadInputError(
            f"No se pudo subir ninguna imagen. Errores: {', '.join(result.errors)}"
        )

    logger.info(
        "Imágenes de carga masiva: %s subidas, %s rechazadas",
        len(result.images),
        len(result.errors),
    )
    return result


__all__ = ["ALLOWED_IMAGE_TYPES", "IncomingImage", "upload_bulk_images"]
