"""Tests for the audit sink helpers."""

from datetime import datetime
from decimal import Decimal

import pytest

from app.application.use_cases.audit_logs import (
    PROTECTED_VALUE,
    clean_audit_snapshot,
    get_audit_log,
    list_audit_logs,
    record_create,
    record_delete,
)
from app.domain.entities import AuditContext


def test_snapshot_is_json_safe_and_masks_sensitive_fields() -> None:
    snapshot = clean_audit_snapshot(
        {
            "password": "secret",
            "updated_at": datetime(2026, 1, 2, 3, 4),
            "created_at": datetime(2026, 1, 1, 8, 30),
            "price": Decimal("10.50"),
            "nested": {"password": "x", "name": "ok"},
            "name": "Excavadora",
        }
    )

    assert snapshot == {
        "password": PROTECTED_VALUE,
        "updated_at": PROTECTED_VALUE,
        "created_at": "2026-01-01T08:30:00",
        "price": 10.5,
        "nested": {"password": PROTECTED_VALUE, "name": "ok"},
        "name": "Excavadora",
    }
    assert clean_audit_snapshot(None) is None


def test_entries_are_recorded_and_filtered(db_session) -> None:
    context = AuditContext(user_id=5, user_email="admin@example.com", comment="Carga masiva de productos")
    record_create(db_session, table_name="vehicle", record_id=1, new_data={"name": "A"}, context=context)
    record_create(db_session, table_name="vehicle", record_id=2, new_data={"name": "B"}, context=context)
    deleted = record_delete(
        db_session,
        table_name="vehicle",
        record_id=1,
        previous_data={"name": "A"},
        context=AuditContext(user_id=6),
    )

    assert deleted.operation == "DELETE"
    assert deleted.previous_data == {"name": "A"}
    assert deleted.new_data is None

    newest_first = list_audit_logs(db_session, table_name="vehicle")
    assert [entry.record_id for entry in newest_first] == ["1", "2", "1"]
    assert [entry.id for entry in list_audit_logs(db_session, operation="create")] == [2, 1]
    assert [entry.record_id for entry in list_audit_logs(db_session, user_id=6)] == ["1"]
    assert len(list_audit_logs(db_session, skip=1, limit=1)) == 1

    assert get_audit_log(db_session, deleted.id).comment is None
    with pytest.raises(ValueError):
        get_audit_log(db_session, 999)
