"""Domain entities describing audit trail records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

AUDIT_OPERATION_CREATE = "CREATE"
AUDIT_OPERATION_UPDATE = "UPDATE"
AUDIT_OPERATION_DELETE = "DELETE"


@dataclass(frozen=True)
class AuditContext:
    """Who is acting and why, passed explicitly to every audited write."""

    user_id: int | None
    user_email: str | None = None
    comment: str | None = None


@dataclass
class AuditLog:
    """A change recorded against a catalog table."""

    id: int | None
    table_name: str
    record_id: str
    operation: str
    previous_data: dict[str, Any] | None
    new_data: dict[str, Any] | None
    user_id: int | None
    user_email: str | None
    comment: str | None
    created_at: datetime | None = field(default=None)


__all__ = [
    "AUDIT_OPERATION_CREATE",
    "AUDIT_OPERATION_DELETE",
    "AUDIT_OPERATION_UPDATE",
    "AuditContext",
    "AuditLog",
]
