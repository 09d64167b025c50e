"""Schemas for audit log endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    """Representation of an audit log entry returned by the API."""

    id: int
    table_name: str
    record_id: str
    operation: str
    previous_data: dict[str, Any] | None
    new_data: dict[str, Any] | None
    user_id: int | None
    user_email: str | None
    comment: str | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["AuditLogRead"]
