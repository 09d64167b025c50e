"""Validation phase of a bulk catalog upload."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    DuplicateProduct,
    ExcelRow,
    UploadedImage,
    User,
    ValidatedProduct,
    ValidationError,
    ValidationResult,
)
from app.infrastructure.repositories import VehicleRepository
from app.utils import current_year_in_app_timezone

from .access import ensure_admin
from .duplicates import DuplicateResolver, build_identity_key
from .errors import BulkUploadInputError, ProductStoreUnavailableError
from .spreadsheet import parse_product_rows
from .validators import validate_row

logger = logging.getLogger(__name__)

_SUPPORTED_EXTENSIONS = {".xlsx", ".xls"}
_SUPPORTED_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
}


def _ensure_spreadsheet_file(
    file_bytes: bytes,
    filename: str | None,
    content_type: str | None,
    max_bytes: int,
) -> None:
    suffix = Path(filename or "").suffix.lower()
    if suffix not in _SUPPORTED_EXTENSIONS and content_type not in _SUPPORTED_CONTENT_TYPES:
        raise BulkUploadInputError("El archivo debe ser Excel (.xlsx o .xls)")

    if not file_bytes:
        raise BulkUploadInputError("El archivo está vacío")

    if len(file_bytes) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise BulkUploadInputError(f"El archivo Excel no puede exceder {limit_mb}MB")


def build_image_lookup(images: Iterable[UploadedImage]) -> dict[str, str]:
    """Map each uploaded file name to its URL; later entries win on collision."""

    return {image.file_name: image.url for image in images}


def _to_validated_product(row: ExcelRow, image_lookup: dict[str, str]) -> ValidatedProduct:
    imagen = (row.imagen or "").strip() or None
    return ValidatedProduct(
        row_number=row.row_number,
        nombre=row.nombre.strip(),
        marca=row.marca.strip(),
        modelo=row.modelo.strip(),
        categoria=row.categoria.strip(),
        anio=row.anio,
        precio_dia=row.precio_dia,
        stock=row.stock,
        disponible=row.disponible,
        precio_hora=row.precio_hora,
        precio_semana=row.precio_semana,
        precio_mes=row.precio_mes,
        peso=row.peso,
        potencia=row.potencia,
        capacidad=row.capacidad,
        especificaciones=row.especificaciones,
        descripcion=row.descripcion,
        imagen=imagen,
        imagen_url=image_lookup.get(imagen) if imagen else None,
    )


def classify_rows(
    rows: Iterable[ExcelRow],
    *,
    image_lookup: dict[str, str],
    resolver: DuplicateResolver,
    current_year: int,
) -> ValidationResult:
    """Partition ``rows`` into products to create, catalog duplicates and errors.

    Each row lands in exactly one bucket and every bucket keeps the input order.
    """

    result = ValidationResult()
    for row in rows:
        row_errors = validate_row(row, image_lookup, current_year=current_year)
        if row_errors:
            result.errors.extend(row_errors)
            continue

        key = build_identity_key(row.marca, row.modelo, row.categoria)
        existing_id = resolver.find_existing(key)
        if existing_id is not None:
            result.duplicates.append(
                DuplicateProduct(
                    row_number=row.row_number,
                    nombre=row.nombre.strip(),
                    categoria=row.categoria.strip(),
                    existing_id=existing_id,
                )
            )
            continue

        if resolver.is_repeated(key):
            result.errors.append(
                ValidationError(
                    row_number=row.row_number,
                    field="modelo",
                    message=(
                        "Este producto (misma marca, modelo y categoría) está "
                        "duplicado dentro del mismo archivo"
                    ),
                    value=f"{row.marca.strip()} {row.modelo.strip()} - {row.categoria.strip()}",
                )
            )
            continue

        resolver.accept(key)
        result.to_create.append(_to_validated_product(row, image_lookup))

    return result


def validate_bulk_upload(
    session: Session,
    *,
    user: User,
    file_bytes: bytes,
    filename: str | None,
    content_type: str | None = None,
    uploaded_images: Iterable[UploadedImage] = (),
    vehicle_repository: VehicleRepository | None = None,
    current_year: int | None = None,
) -> ValidationResult:
    """Validate a product spreadsheet without writing to the catalog.

    Raises :class:`PermissionError` for non administrators,
    :class:`BulkUploadInputError` when the file itself is unusable and
    :class:`ProductStoreUnavailableError` when existing products cannot be read.
    """

    ensure_admin(user)
    settings = get_settings()

    _ensure_spreadsheet_file(
        file_bytes, filename, content_type, settings.bulk_upload_max_file_bytes
    )
    rows = parse_product_rows(file_bytes, max_rows=settings.bulk_upload_max_rows)
    image_lookup = build_image_lookup(uploaded_images)

    repository = vehicle_repository or VehicleRepository(session)
    try:
        existing = repository.list_identity()
    except SQLAlchemyError as exc:
        logger.exception("No se pudieron leer los productos existentes")
        raise ProductStoreUnavailableError(
            "No se pudieron consultar los productos existentes. Intenta nuevamente"
        ) from exc

    result = classify_rows(
        rows,
        image_lookup=image_lookup,
        resolver=DuplicateResolver(existing),
        current_year=current_year or current_year_in_app_timezone(),
    )
    logger.info(
        "Validación de carga masiva %s: %s filas, %s a crear, %s duplicados, %s errores",
        filename,
        len(rows),
        len(result.to_create),
        len(result.duplicates),
        len(result.errors),
    )
    return result


__all__ = ["build_image_lookup", "classify_rows", "validate_bulk_upload"]
