"""SQLAlchemy model for catalog vehicles."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    func,
)

from app.infrastructure.database import Base


class VehicleModel(Base):
    """Database representation of a rentable product."""

    __tablename__ = "vehicle"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    plate = Column(String(32), nullable=False, unique=True)
    brand = Column(String(50), nullable=False, index=True)
    model = Column(String(50), nullable=False)
    internal_model = Column(String(120), nullable=False, unique=True)
    category = Column(String(100), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    daily_price = Column(Float, nullable=False)
    hourly_price = Column(Float, nullable=True)
    weekly_price = Column(Float, nullable=True)
    monthly_price = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    power = Column(Float, nullable=True)
    capacity = Column(String(100), nullable=True)
    specifications = Column(Text, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)
    description = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False)
    owner_id = Column(Integer, nullable=True)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True, index=True)
    deleted_by = Column(Integer, nullable=True)


__all__ = ["VehicleModel"]
