"""SQLAlchemy model for audit records of catalog operations."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone

_audit_json_type = JSON().with_variant(JSONB(), "postgresql")


class AuditLogModel(Base):
    """Database representation of audit events."""

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    table_name = Column(String(63), nullable=False, index=True)
    record_id = Column(String(64), nullable=False, index=True)
    operation = Column(String(20), nullable=False)
    previous_data = Column(_audit_json_type, nullable=True)
    new_data = Column(_audit_json_type, nullable=True)
    user_id = Column(Integer, nullable=True, index=True)
    user_email = Column(String(120), nullable=True)
    comment = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["AuditLogModel"]
