"""Rutas de la API para la gestión de vehículos del catálogo."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.vehicles import (
    VehicleAlreadyDeletedError,
    soft_delete_vehicle as soft_delete_vehicle_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import VehicleRead

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.delete("/{vehicle_id}", response_model=VehicleRead)
def delete_vehicle(
    vehicle_id: int,
    reason: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> VehicleRead:
    """Marca el vehículo como eliminado sin borrarlo de la base de datos."""

    try:
        vehicle = soft_delete_vehicle_uc(
            db, vehicle_id=vehicle_id, user=current_user, reason=reason
        )
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except VehicleAlreadyDeletedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return VehicleRead.model_validate(vehicle)


__all__ = ["router"]
