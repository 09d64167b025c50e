"""Creation phase of a bulk catalog upload."""

from __future__ import annotations

import logging
import secrets
import string
import time
from collections.abc import Sequence
from dataclasses import asdict

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    VEHICLE_STATUS_AVAILABLE,
    VEHICLE_STATUS_OUT_OF_SERVICE,
    AuditContext,
    BulkUploadResult,
    User,
    ValidatedProduct,
    ValidationError,
    Vehicle,
)
from app.infrastructure.repositories import AuditLogRepository, VehicleRepository
from app.utils import ensure_app_naive_datetime, now_in_app_timezone

from ..audit_logs import record_create
from .access import ensure_admin

logger = logging.getLogger(__name__)

VEHICLE_TABLE_NAME = "vehicle"
BULK_UPLOAD_COMMENT = "Carga masiva de productos"

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_BASE36_DIGITS) for _ in range(length))


def _timestamp_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_plate() -> str:
    """Machine generated plate such as ``AUTO-MB1X2K3Z-Q7F``."""

    return f"AUTO-{_to_base36(_timestamp_ms()).upper()}-{_random_suffix(3).upper()}"


def generate_internal_model(marca: str, modelo: str) -> str:
    """Storage label ``<marca>-<modelo>-<timestamp>`` unique per created row.

    It is only meant to satisfy the uniqueness of the stored label and is
    unrelated to the business identity used to detect duplicates.
    """

    return f"{marca}-{modelo}-{_to_base36(_timestamp_ms())}{_random_suffix(2)}"


def _build_vehicle(product: ValidatedProduct, user: User) -> Vehicle:
    now = ensure_app_naive_datetime(now_in_app_timezone())
    return Vehicle(
        id=None,
        name=product.nombre,
        plate=generate_plate(),
        brand=product.marca,
        model=product.modelo,
        internal_model=generate_internal_model(product.marca, product.modelo),
        category=product.categoria,
        year=product.anio,
        daily_price=product.precio_dia,
        hourly_price=product.precio_hora,
        weekly_price=product.precio_semana,
        monthly_price=product.precio_mes,
        weight=product.peso,
        power=product.potencia,
        capacity=product.capacidad,
        specifications=product.especificaciones,
        stock=product.stock,
        available=product.disponible,
        description=product.descripcion,
        image_url=product.imagen_url,
        status=(
            VEHICLE_STATUS_AVAILABLE
            if product.disponible
            else VEHICLE_STATUS_OUT_OF_SERVICE
        ),
        owner_id=user.id,
        created_by=user.id,
        created_at=now,
        updated_by=user.id,
        updated_at=now,
    )


def _batches(products: Sequence[ValidatedProduct], size: int):
    for start in range(0, len(products), size):
        yield products[start : start + size]


def process_bulk_upload(
    session: Session,
    *,
    user: User,
    products: Sequence[ValidatedProduct],
    vehicle_repository: VehicleRepository | None = None,
    audit_repository: AuditLogRepository | None = None,
    batch_size: int | None = None,
) -> BulkUploadResult:
    """Create every product previously accepted by the validation phase.

    Rows are created one by one; a failing row is reported under the
    ``create`` field and never prevents the remaining rows from being created.
    """

    ensure_admin(user)

    if not products:
        return BulkUploadResult(
            success=False,
            created=0,
            duplicates_skipped=0,
            errors=1,
            error_details=[
                ValidationError(
                    row_number=0,
                    field="products",
                    message="No hay productos para crear",
                )
            ],
        )

    repository = vehicle_repository or VehicleRepository(session)
    audit_repository = audit_repository or AuditLogRepository(session)
    size = batch_size or get_settings().bulk_upload_batch_size

    created_ids: list[int] = []
    failures: list[ValidationError] = []

    for batch_number, batch in enumerate(_batches(products, size), start=1):
        logger.debug("Procesando lote %s con %s productos", batch_number, len(batch))
        for product in batch:
            try:
                vehicle = repository.create(_build_vehicle(product, user))
            except Exception as exc:  # each row is isolated from the rest
                session.rollback()
                logger.exception(
                    "No se pudo crear el producto de la fila %s", product.row_number
                )
                failures.append(
                    ValidationError(
                        row_number=product.row_number,
                        field="create",
                        message=str(exc) or "Error al crear producto",
                        value=product.nombre,
                    )
                )
                continue

            created_ids.append(vehicle.id)
            record_create(
                session,
                table_name=VEHICLE_TABLE_NAME,
                record_id=vehicle.id,
                new_data=asdict(vehicle),
                context=AuditContext(
                    user_id=user.id,
                    user_email=user.email,
                    comment=(
                        "Producto creado vía carga masiva: "
                        f"{product.marca} {product.modelo} ({product.categoria})"
                    ),
                ),
                repository=audit_repository,
            )

    logger.info(
        "%s: %s productos creados, %s errores (usuario %s)",
        BULK_UPLOAD_COMMENT,
        len(created_ids),
        len(failures),
        user.id,
    )
    return BulkUploadResult(
        success=not failures,
        created=len(created_ids),
        duplicates_skipped=0,
        errors=len(failures),
        created_ids=created_ids,
        error_details=failures or None,
    )


__all__ = [
    "BULK_UPLOAD_COMMENT",
    "VEHICLE_TABLE_NAME",
    "generate_internal_model",
    "generate_plate",
    "process_bulk_upload",
]
