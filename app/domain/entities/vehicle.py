"""Domain entities for catalog vehicles (rental products)."""

from dataclasses import dataclass
from datetime import datetime

VEHICLE_STATUS_AVAILABLE = "DISPONIBLE"
VEHICLE_STATUS_OUT_OF_SERVICE = "FUERA_SERVICIO"


@dataclass
class Vehicle:
    """A rentable product persisted in the catalog.

    ``plate`` and ``internal_model`` only guarantee storage uniqueness; the
    business identity of a product is its ``brand``/``model``/``category``.
    """

    id: int | None
    name: str
    plate: str
    brand: str
    model: str
    internal_model: str
    category: str
    year: int
    daily_price: float
    hourly_price: float | None
    weekly_price: float | None
    monthly_price: float | None
    weight: float | None
    power: float | None
    capacity: str | None
    specifications: str | None
    stock: int
    available: bool
    description: str | None
    image_url: str | None
    status: str
    owner_id: int | None
    created_by: int | None
    created_at: datetime | None
    updated_by: int | None
    updated_at: datetime | None
    deleted_at: datetime | None = None
    deleted_by: int | None = None


@dataclass(frozen=True)
class VehicleIdentity:
    """Fields needed to decide whether a product already exists."""

    id: int
    marca: str
    modelo: str
    categoria: str


__all__ = [
    "VEHICLE_STATUS_AVAILABLE",
    "VEHICLE_STATUS_OUT_OF_SERVICE",
    "Vehicle",
    "VehicleIdentity",
]
