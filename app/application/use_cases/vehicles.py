"""Use cases for catalog vehicles outside of the bulk upload."""

from __future__ import annotations

import logging
from dataclasses import asdict

from sqlalchemy.orm import Session

from app.domain.entities import AuditContext, User, Vehicle
from app.infrastructure.repositories import VehicleRepository
from app.utils import ensure_app_naive_datetime, now_in_app_timezone

from .audit_logs import record_delete

logger = logging.getLogger(__name__)


class VehicleAlreadyDeletedError(ValueError):
    """Raised when soft deleting a vehicle that was already deleted."""


def soft_delete_vehicle(
    session: Session,
    *,
    vehicle_id: int,
    user: User,
    reason: str | None = None,
) -> Vehicle:
    """Mark a vehicle as deleted so it leaves the catalog and duplicate checks."""

    if not user.is_admin():
        raise PermissionError("Solo los administradores pueden eliminar vehículos")

    repository = VehicleRepository(session)
    vehicle = repository.get(vehicle_id, include_deleted=True)
    if vehicle is None:
        raise ValueError("Vehículo no encontrado")
    if vehicle.deleted_at is not None:
        raise VehicleAlreadyDeletedError("El vehículo ya está eliminado")

    deleted = repository.soft_delete(
        vehicle_id,
        deleted_by=user.id,
        deleted_at=ensure_app_naive_datetime(now_in_app_timezone()),
    )
    record_delete(
        session,
        table_name="vehicle",
        record_id=vehicle_id,
        previous_data=asdict(vehicle),
        context=AuditContext(
            user_id=user.id,
            user_email=user.email,
            comment=f"Vehículo marcado como eliminado: {reason or 'Sin razón'}",
        ),
    )
    logger.info("Vehículo %s eliminado por el usuario %s", vehicle_id, user.id)
    return deleted


__all__ = ["VehicleAlreadyDeletedError", "soft_delete_vehicle"]
