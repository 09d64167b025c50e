"""Tests for the validation phase of a bulk upload against a SQLite catalog."""

from datetime import datetime

import pytest

pytest.importorskip("pandas")
pytest.importorskip("openpyxl")

from conftest import build_xlsx, make_user, product_row
from sqlalchemy.exc import OperationalError

from app.application.use_cases.bulk_upload import (
    BulkUploadInputError,
    ProductStoreUnavailableError,
    validate_bulk_upload,
)
from app.domain.entities import UploadedImage, Vehicle
from app.infrastructure.repositories import VehicleRepository

XLSX = "productos.xlsx"


def _store_vehicle(session, *, brand: str, model: str, category: str, deleted: bool = False) -> int:
    now = datetime(2026, 1, 1, 9, 0)
    vehicle = VehicleRepository(session).create(
        Vehicle(
            id=None,
            name=f"{category} {brand} {model}",
            plate=f"AUTO-{brand}-{model}",
            brand=brand,
            model=model,
            internal_model=f"{brand}-{model}-seed",
            category=category,
            year=2020,
            daily_price=1000.0,
            hourly_price=None,
            weekly_price=None,
            monthly_price=None,
            weight=None,
            power=None,
            capacity=None,
            specifications=None,
            stock=1,
            available=True,
            description=None,
            image_url=None,
            status="DISPONIBLE",
            owner_id=1,
            created_by=1,
            created_at=now,
            updated_by=1,
            updated_at=now,
            deleted_at=now if deleted else None,
            deleted_by=1 if deleted else None,
        )
    )
    return vehicle.id


def _validate(session, user, content: bytes, **kwargs):
    return validate_bulk_upload(
        session,
        user=user,
        file_bytes=content,
        filename=kwargs.pop("filename", XLSX),
        current_year=2026,
        **kwargs,
    )


def test_in_file_duplicate_and_missing_price_are_errors(db_session, admin_user) -> None:
    content = build_xlsx(
        [
            product_row(),
            product_row(marca="cat", modelo=" 320d ", categoria="EXCAVADORA", nombre="Otra excavadora"),
            product_row(marca="JCB", modelo="3CX", categoria="Retroexcavadora", precio_dia=None),
        ]
    )

    result = _validate(db_session, admin_user, content)

    assert [product.row_number for product in result.to_create] == [2]
    assert [(error.row_number, error.field) for error in result.errors] == [
        (3, "modelo"),
        (4, "precio_dia"),
    ]
    assert "duplicado dentro del mismo archivo" in result.errors[0].message
    assert result.errors[0].value == "cat 320d - EXCAVADORA"
    assert result.duplicates == []


def test_existing_catalog_product_is_reported_as_duplicate(db_session, admin_user) -> None:
    existing_id = _store_vehicle(db_session, brand="CAT", model="320D", category="Excavadora")
    content = build_xlsx([product_row(marca=" cat", modelo="320d", categoria="excavadora")])

    result = _validate(db_session, admin_user, content)

    assert result.to_create == []
    assert result.errors == []
    (duplicate,) = result.duplicates
    assert duplicate.row_number == 2
    assert duplicate.existing_id == existing_id
    assert duplicate.categoria == "excavadora"


def test_soft_deleted_products_are_not_duplicates(db_session, admin_user) -> None:
    _store_vehicle(db_session, brand="CAT", model="320D", category="Excavadora", deleted=True)

    result = _validate(db_session, admin_user, build_xlsx([product_row()]))

    assert len(result.to_create) == 1
    assert result.duplicates == []


def test_every_row_lands_in_exactly_one_bucket_in_order(db_session, admin_user) -> None:
    _store_vehicle(db_session, brand="Komatsu", model="PC200", category="Excavadora")
    rows = [
        product_row(modelo="A1"),
        product_row(marca="Komatsu", modelo="PC200"),
        product_row(modelo="A2", nombre="x", stock=-2),
        product_row(modelo="A3"),
        product_row(modelo="a1"),
        product_row(modelo="A4", anio=1950),
    ]

    result = _validate(db_session, admin_user, build_xlsx(rows))

    created = [product.row_number for product in result.to_create]
    duplicated = [duplicate.row_number for duplicate in result.duplicates]
    failed = sorted({error.row_number for error in result.errors})
    assert created == [2, 5]
    assert duplicated == [3]
    assert failed == [4, 6, 7]
    assert sorted(created + duplicated + failed) == list(range(2, 8))
    assert [error.row_number for error in result.errors] == sorted(
        error.row_number for error in result.errors
    )


def test_images_are_resolved_from_the_uploaded_set(db_session, admin_user) -> None:
    content = build_xlsx(
        [
            product_row(imagen="foo.jpg"),
            product_row(modelo="PC200", imagen="bar.jpg"),
        ]
    )
    images = [UploadedImage(file_name="foo.jpg", url="https://x/foo.jpg", size=10)]

    result = _validate(db_session, admin_user, content, uploaded_images=images)

    (product,) = result.to_create
    assert product.imagen_url == "https://x/foo.jpg"
    (error,) = result.errors
    assert (error.row_number, error.field) == (3, "imagen")


def test_row_with_one_bad_field_is_never_partially_accepted(db_session, admin_user) -> None:
    result = _validate(db_session, admin_user, build_xlsx([product_row(anio=1900)]))

    assert result.to_create == []
    assert [error.field for error in result.errors] == ["anio"]


def test_file_checks_run_before_parsing(db_session, admin_user) -> None:
    with pytest.raises(BulkUploadInputError, match=r"\.xlsx o \.xls"):
        _validate(db_session, admin_user, b"a,b", filename="productos.csv")

    with pytest.raises(BulkUploadInputError, match="vacío"):
        _validate(db_session, admin_user, b"")

    with pytest.raises(BulkUploadInputError, match="5MB"):
        _validate(db_session, admin_user, b"0" * (5 * 1024 * 1024 + 1))


def test_more_than_500_rows_is_rejected(db_session, admin_user) -> None:
    content = build_xlsx([product_row(modelo=f"M{index}") for index in range(501)])

    with pytest.raises(BulkUploadInputError, match="500"):
        _validate(db_session, admin_user, content)


def test_non_admin_cannot_validate(db_session) -> None:
    with pytest.raises(PermissionError):
        _validate(db_session, make_user("cliente"), build_xlsx([product_row()]))


def test_store_failure_aborts_validation(db_session, admin_user) -> None:
    class _FailingRepository:
        def list_identity(self):
            raise OperationalError("SELECT", {}, Exception("db down"))

    with pytest.raises(ProductStoreUnavailableError):
        _validate(
            db_session,
            admin_user,
            build_xlsx([product_row()]),
            vehicle_repository=_FailingRepository(),
        )
