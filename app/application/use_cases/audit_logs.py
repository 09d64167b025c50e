"""Use cases for recording and reading audit log entries."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    AUDIT_OPERATION_CREATE,
    AUDIT_OPERATION_DELETE,
    AuditContext,
    AuditLog,
)
from app.infrastructure.repositories import AuditLogRepository

logger = logging.getLogger(__name__)

PROTECTED_VALUE = "[PROTECTED]"
_PROTECTED_FIELDS = frozenset({"password", "updated_at"})


def clean_audit_snapshot(data: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return a JSON-safe copy of ``data`` with sensitive fields masked."""

    if data is None:
        return None

    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if key in _PROTECTED_FIELDS:
            cleaned[key] = PROTECTED_VALUE
        elif isinstance(value, (datetime, date)):
            cleaned[key] = value.isoformat()
        elif isinstance(value, Decimal):
            cleaned[key] = float(value)
        elif isinstance(value, Mapping):
            cleaned[key] = clean_audit_snapshot(value)
        else:
            cleaned[key] = value
    return cleaned


def _record(
    session: Session,
    *,
    table_name: str,
    record_id: Any,
    operation: str,
    previous_data: Mapping[str, Any] | None,
    new_data: Mapping[str, Any] | None,
    context: AuditContext,
    repository: AuditLogRepository | None,
) -> AuditLog | None:
    repository = repository or AuditLogRepository(session)
    entry = AuditLog(
        id=None,
        table_name=table_name,
        record_id=str(record_id),
        operation=operation,
        previous_data=clean_audit_snapshot(previous_data),
        new_data=clean_audit_snapshot(new_data),
        user_id=context.user_id,
        user_email=context.user_email,
        comment=context.comment,
    )
    try:
        return repository.create(entry)
    except SQLAlchemyError:
        # Auditing never undoes the change being audited.
        session.rollback()
        logger.warning(
            "No se pudo registrar la auditoría %s de %s #%s",
            operation,
            table_name,
            record_id,
            exc_info=True,
        )
        return None


def record_create(
    session: Session,
    *,
    table_name: str,
    record_id: Any,
    new_data: Mapping[str, Any],
    context: AuditContext,
    repository: AuditLogRepository | None = None,
) -> AuditLog | None:
    """Record the creation of ``record_id``; return ``None`` if it could not be stored."""

    return _record(
        session,
        table_name=table_name,
        record_id=record_id,
        operation=AUDIT_OPERATION_CREATE,
        previous_data=None,
        new_data=new_data,
        context=context,
        repository=repository,
    )


def record_delete(
    session: Session,
    *,
    table_name: str,
    record_id: Any,
    previous_data: Mapping[str, Any],
    context: AuditContext,
    repository: AuditLogRepository | None = None,
) -> AuditLog | None:
    """Record the deletion of ``record_id``; return ``None`` if it could not be stored."""

    return _record(
        session,
        table_name=table_name,
        record_id=record_id,
        operation=AUDIT_OPERATION_DELETE,
        previous_data=previous_data,
        new_data=None,
        context=context,
        repository=repository,
    )


def list_audit_logs(
    session: Session,
    *,
    table_name: str | None = None,
    record_id: str | None = None,
    user_id: int | None = None,
    operation: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[AuditLog]:
    """Return audit log entries, newest first, matching the given filters."""

    repository = AuditLogRepository(session)
    return repository.list(
        table_name=table_name,
        record_id=record_id,
        user_id=user_id,
        operation=operation,
        skip=skip,
        limit=limit,
    )


def get_audit_log(session: Session, entry_id: int) -> AuditLog:
    """Return an audit log entry identified by ``entry_id`` or raise an error."""

    repository = AuditLogRepository(session)
    entry = repository.get(entry_id)
    if entry is None:
        raise ValueError("Registro de auditoría no encontrado")
    return entry


__all__ = [
    "PROTECTED_VALUE",
    "clean_audit_snapshot",
    "get_audit_log",
    "list_audit_logs",
    "record_create",
    "record_delete",
]
