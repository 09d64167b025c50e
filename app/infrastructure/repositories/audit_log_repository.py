"""Persistence layer for audit log records."""

from typing import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import AuditLog
from app.infrastructure.models import AuditLogModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class AuditLogRepository:
    """Provide create and read helpers for :class:`AuditLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: AuditLog) -> AuditLog:
        model = AuditLogModel()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, entry_id: int) -> AuditLog | None:
        """Return an audit entry by its primary key, if present."""

        model = self.session.get(AuditLogModel, entry_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list(
        self,
        *,
        table_name: str | None = None,
        record_id: str | None = None,
        user_id: int | None = None,
        operation: str | None = None,
        skip: int = 0,
        limit: int | None = 50,
    ) -> list[AuditLog]:
        """Return audit entries, newest first, matching every given filter."""

        query = self.session.query(AuditLogModel)
        if table_name is not None:
            query = query.filter(AuditLogModel.table_name == table_name)
        if record_id is not None:
            query = query.filter(AuditLogModel.record_id == record_id)
        if user_id is not None:
            query = query.filter(AuditLogModel.user_id == user_id)
        if operation is not None:
            query = query.filter(AuditLogModel.operation == operation.upper())

        query = query.order_by(AuditLogModel.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)

        models: Iterable[AuditLogModel] = query.all()
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: AuditLogModel) -> AuditLog:
        return AuditLog(
            id=model.id,
            table_name=model.table_name,
            record_id=model.record_id,
            operation=model.operation,
            previous_data=dict(model.previous_data) if model.previous_data else None,
            new_data=dict(model.new_data) if model.new_data else None,
            user_id=model.user_id,
            user_email=model.user_email,
            comment=model.comment,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: AuditLogModel, entry: AuditLog) -> None:
        model.table_name = entry.table_name
        model.record_id = entry.record_id
        model.operation = entry.operation
        model.previous_data = entry.previous_data
        model.new_data = entry.new_data
        model.user_id = entry.user_id
        model.user_email = entry.user_email
        model.comment = entry.comment
        model.created_at = (
            ensure_app_naive_datetime(entry.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )


__all__ = ["AuditLogRepository"]
