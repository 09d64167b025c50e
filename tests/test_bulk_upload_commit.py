"""Tests for the creation phase of a bulk upload."""

import re
from dataclasses import replace

import pytest
from conftest import make_user
from sqlalchemy.exc import OperationalError

from app.application.use_cases.bulk_upload import process_bulk_upload
from app.application.use_cases.bulk_upload.commit_upload import (
    generate_internal_model,
    generate_plate,
)
from app.domain.entities import ValidatedProduct
from app.infrastructure.repositories import AuditLogRepository, VehicleRepository


def _product(row_number: int, **overrides) -> ValidatedProduct:
    values = {
        "row_number": row_number,
        "nombre": f"Producto {row_number}",
        "marca": "CAT",
        "modelo": f"M{row_number}",
        "categoria": "Excavadora",
        "anio": 2020,
        "precio_dia": 1500.0,
        "stock": 2,
        "disponible": True,
    }
    values.update(overrides)
    return ValidatedProduct(**values)


class _StubVehicleRepository:
    def __init__(self, failing_names=()):
        self.failing_names = set(failing_names)
        self.created = []

    def create(self, vehicle):
        if vehicle.name in self.failing_names:
            raise RuntimeError("placa duplicada")
        stored = replace(vehicle, id=100 + len(self.created))
        self.created.append(stored)
        return stored


class _StubAuditRepository:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.entries = []

    def create(self, entry):
        if self.fail:
            raise OperationalError("INSERT", {}, Exception("audit down"))
        self.entries.append(entry)
        return entry


class _StubSession:
    def __init__(self):
        self.rollbacks = 0

    def rollback(self):
        self.rollbacks += 1


def test_a_failing_row_does_not_stop_the_rest() -> None:
    session = _StubSession()
    vehicles = _StubVehicleRepository(failing_names={"Producto 4"})
    audits = _StubAuditRepository()
    products = [_product(row) for row in range(2, 7)]

    result = process_bulk_upload(
        session,
        user=make_user(),
        products=products,
        vehicle_repository=vehicles,
        audit_repository=audits,
        batch_size=2,
    )

    assert result.created == 4
    assert result.errors == 1
    assert result.success is False
    assert result.duplicates_skipped == 0
    assert result.created_ids == [100, 101, 102, 103]
    (failure,) = result.error_details
    assert (failure.row_number, failure.field, failure.value) == (4, "create", "Producto 4")
    assert failure.message == "placa duplicada"
    assert session.rollbacks == 1
    assert [entry.record_id for entry in audits.entries] == ["100", "101", "102", "103"]


def test_created_vehicles_carry_storage_keys_and_status() -> None:
    vehicles = _StubVehicleRepository()
    user = make_user(user_id=42)

    result = process_bulk_upload(
        _StubSession(),
        user=user,
        products=[_product(2), _product(3, disponible=False, modelo="M2")],
        vehicle_repository=vehicles,
        audit_repository=_StubAuditRepository(),
    )

    assert result.success is True
    assert result.error_details is None
    first, second = vehicles.created
    assert first.status == "DISPONIBLE"
    assert second.status == "FUERA_SERVICIO"
    assert first.model == "M2"
    assert first.internal_model.startswith("CAT-M2-")
    assert first.plate != second.plate
    assert (first.owner_id, first.created_by, first.updated_by) == (42, 42, 42)


def test_audit_failures_do_not_fail_the_creation() -> None:
    session = _StubSession()

    result = process_bulk_upload(
        session,
        user=make_user(),
        products=[_product(2)],
        vehicle_repository=_StubVehicleRepository(),
        audit_repository=_StubAuditRepository(fail=True),
    )

    assert result.success is True
    assert result.created == 1
    assert session.rollbacks == 1


def test_empty_product_list_is_a_failure_result() -> None:
    result = process_bulk_upload(_StubSession(), user=make_user(), products=[])

    assert result.success is False
    assert result.created == 0
    assert [(error.field, error.message) for error in result.error_details] == [
        ("products", "No hay productos para crear")
    ]


def test_non_admin_cannot_commit() -> None:
    vehicles = _StubVehicleRepository()

    with pytest.raises(PermissionError):
        process_bulk_upload(
            _StubSession(),
            user=make_user("cliente"),
            products=[_product(2)],
            vehicle_repository=vehicles,
        )

    assert vehicles.created == []


def test_commit_persists_vehicles_and_audit_entries(db_session, admin_user) -> None:
    products = [
        _product(2, imagen="foo.jpg", imagen_url="https://x/foo.jpg", precio_semana=9000.0),
        _product(3, marca="JCB", modelo="3CX", categoria="Retroexcavadora"),
    ]

    result = process_bulk_upload(db_session, user=admin_user, products=products)

    assert result.created == 2
    stored = VehicleRepository(db_session).get(result.created_ids[0])
    assert stored.brand == "CAT"
    assert stored.model == "M2"
    assert stored.image_url == "https://x/foo.jpg"
    assert stored.weekly_price == 9000.0

    identities = VehicleRepository(db_session).list_identity()
    assert {(identity.marca, identity.modelo) for identity in identities} == {
        ("CAT", "M2"),
        ("JCB", "3CX"),
    }

    entries = AuditLogRepository(db_session).list(table_name="vehicle")
    assert len(entries) == 2
    assert entries[-1].operation == "CREATE"
    assert entries[-1].comment == "Producto creado vía carga masiva: CAT M2 (Excavadora)"
    assert entries[-1].user_email == "admin@example.com"
    assert entries[-1].new_data["updated_at"] == "[PROTECTED]"
    assert isinstance(entries[-1].new_data["created_at"], str)


def test_generated_storage_keys_have_the_expected_shape() -> None:
    assert re.fullmatch(r"AUTO-[0-9A-Z]+-[0-9A-Z]{3}", generate_plate())
    assert re.fullmatch(r"CAT-320D-[0-9a-z]+", generate_internal_model("CAT", "320D"))
