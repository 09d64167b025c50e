"""Routes for inspecting audit log entries."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.audit_logs import (
    get_audit_log as get_audit_log_uc,
    list_audit_logs as list_audit_logs_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import AuditLogRead

router = APIRouter(prefix="/audit-logs", tags=["audit_logs"])


@router.get("/", response_model=list[AuditLogRead])
def list_audit_logs(
    table_name: str | None = None,
    record_id: str | None = None,
    user_id: int | None = None,
    operation: str | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[AuditLogRead]:
    """Return audit log entries, newest first, matching the given filters."""

    entries = list_audit_logs_uc(
        db,
        table_name=table_name,
        record_id=record_id,
        user_id=user_id,
        operation=operation,
        skip=skip,
        limit=limit,
    )
    return [AuditLogRead.model_validate(entry) for entry in entries]


@router.get("/{entry_id}", response_model=AuditLogRead)
def read_audit_log(
    entry_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> AuditLogRead:
    """Return the audit log entry identified by ``entry_id``."""

    try:
        entry = get_audit_log_uc(db, entry_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AuditLogRead.model_validate(entry)


__all__ = ["router"]
