"""Schemas for vehicle endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class VehicleRead(BaseModel):
    id: int
    name: str
    plate: str
    brand: str
    model: str
    category: str
    year: int
    daily_price: float
    stock: int
    available: bool
    image_url: str | None
    status: str
    deleted_at: datetime | None
    deleted_by: int | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["VehicleRead"]
