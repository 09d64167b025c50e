"""Persistence layer for catalog vehicles."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Vehicle, VehicleIdentity
from app.infrastructure.models import VehicleModel


class VehicleRepository:
    """Provide the reads and writes the catalog needs for vehicles."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_identity(self) -> list[VehicleIdentity]:
        """Return the identity fields of every vehicle that is not soft deleted."""

        rows = (
            self.session.query(
                VehicleModel.id,
                VehicleModel.brand,
                VehicleModel.model,
                VehicleModel.category,
            )
            .filter(VehicleModel.deleted_at.is_(None))
            .order_by(VehicleModel.id)
            .all()
        )
        return [
            VehicleIdentity(id=row_id, marca=brand, modelo=model, categoria=category)
            for row_id, brand, model, category in rows
        ]

    def get(self, vehicle_id: int, *, include_deleted: bool = False) -> Vehicle | None:
        model = self._get_model(vehicle_id, include_deleted=include_deleted)
        return self._to_entity(model) if model else None

    def create(self, vehicle: Vehicle) -> Vehicle:
        """Insert ``vehicle`` and commit it on its own."""

        model = VehicleModel()
        self._apply_entity_to_model(model, vehicle)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def soft_delete(
        self, vehicle_id: int, *, deleted_by: int | None, deleted_at: datetime
    ) -> Vehicle:
        model = self._get_model(vehicle_id, include_deleted=True)
        if model is None:
            msg = f"Vehicle with id {vehicle_id} not found"
            raise ValueError(msg)

        model.deleted_at = deleted_at
        model.deleted_by = deleted_by
        model.updated_by = deleted_by
        model.updated_at = deleted_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, vehicle_id: int, *, include_deleted: bool = False
    ) -> VehicleModel | None:
        query = self.session.query(VehicleModel).filter(VehicleModel.id == vehicle_id)
        if not include_deleted:
            query = query.filter(VehicleModel.deleted_at.is_(None))
        return query.first()

    @staticmethod
    def _to_entity(model: VehicleModel) -> Vehicle:
        return Vehicle(
            id=model.id,
            name=model.name,
            plate=model.plate,
            brand=model.brand,
            model=model.model,
            internal_model=model.internal_model,
            category=model.category,
            year=model.year,
            daily_price=model.daily_price,
            hourly_price=model.hourly_price,
            weekly_price=model.weekly_price,
            monthly_price=model.monthly_price,
            weight=model.weight,
            power=model.power,
            capacity=model.capacity,
            specifications=model.specifications,
            stock=model.stock,
            available=model.available,
            description=model.description,
            image_url=model.image_url,
            status=model.status,
            owner_id=model.owner_id,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_by=model.updated_by,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
            deleted_by=model.deleted_by,
        )

    @staticmethod
    def _apply_entity_to_model(model: VehicleModel, vehicle: Vehicle) -> None:
        model.name = vehicle.name
        model.plate = vehicle.plate
        model.brand = vehicle.brand
        model.model = vehicle.model
        model.internal_model = vehicle.internal_model
        model.category = vehicle.category
        model.year = vehicle.year
        model.daily_price = vehicle.daily_price
        model.hourly_price = vehicle.hourly_price
        model.weekly_price = vehicle.weekly_price
        model.monthly_price = vehicle.monthly_price
        model.weight = vehicle.weight
        model.power = vehicle.power
        model.capacity = vehicle.capacity
        model.specifications = vehicle.specifications
        model.stock = vehicle.stock
        model.available = vehicle.available
        model.description = vehicle.description
        model.image_url = vehicle.image_url
        model.status = vehicle.status
        model.owner_id = vehicle.owner_id
        model.created_by = vehicle.created_by
        if vehicle.created_at is not None:
            model.created_at = vehicle.created_at
        model.updated_by = vehicle.updated_by
        model.updated_at = vehicle.updated_at
        model.deleted_at = vehicle.deleted_at
        model.deleted_by = vehicle.deleted_by


__all__ = ["VehicleRepository"]
