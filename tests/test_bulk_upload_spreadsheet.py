"""Tests for reading product workbooks."""

import pytest

pytest.importorskip("pandas")
pytest.importorskip("openpyxl")

from conftest import PRODUCT_HEADERS, build_xlsx, product_row

from app.application.use_cases.bulk_upload.errors import (
    BulkUploadInputError,
    SpreadsheetParseError,
)
from app.application.use_cases.bulk_upload.spreadsheet import (
    normalize_header,
    parse_product_rows,
    read_product_sheet,
)


def test_rows_keep_their_physical_numbers_and_skip_blank_lines() -> None:
    content = build_xlsx(
        [
            product_row(),
            [None] * len(PRODUCT_HEADERS),
            product_row(modelo="PC200", marca="Komatsu"),
        ]
    )

    rows = parse_product_rows(content)

    assert [row.row_number for row in rows] == [2, 4]
    assert rows[1].marca == "Komatsu"


def test_headers_are_matched_ignoring_case_whitespace_and_order() -> None:
    headers = ["  DISPONIBLE ", "Stock", "precio_dia", "ANIO", "categoria", "Modelo", "marca", "Nombre", "extra"]
    content = build_xlsx(
        [["true", 4, 900.5, 2021, "Retroexcavadora", "3CX", "JCB", "Retro JCB", "ignored"]],
        headers=headers,
    )

    (row,) = parse_product_rows(content)

    assert row.nombre == "Retro JCB"
    assert row.anio == 2021
    assert row.precio_dia == 900.5
    assert row.stock == 4
    assert row.disponible is True
    assert row.imagen is None


def test_cells_are_coerced_to_typed_values() -> None:
    content = build_xlsx(
        [
            product_row(nombre="  Cargador Frontal  ", anio="2019", stock="abc", disponible="no", precio_dia="x"),
            product_row(disponible=None, anio=2020.5),
        ]
    )

    first, second = parse_product_rows(content)

    assert first.nombre == "Cargador Frontal"
    assert first.anio == 2019
    assert first.stock is None
    assert first.precio_dia is None
    assert first.disponible is False
    assert second.disponible is None
    assert second.anio is None


def test_productos_sheet_is_preferred_over_the_first_sheet() -> None:
    content = build_xlsx([product_row()], extra_sheets=["Instrucciones"])

    sheet = read_product_sheet(content)

    assert sheet.sheet_name == "Productos"


def test_missing_required_columns_are_reported_together() -> None:
    headers = ("nombre", "marca", "modelo", "categoria", "anio")
    content = build_xlsx([["Excavadora", "CAT", "320D", "Excavadora", 2020]], headers=headers)

    with pytest.raises(SpreadsheetParseError) as exc_info:
        parse_product_rows(content)

    message = str(exc_info.value)
    assert "precio_dia, stock, disponible" in message
    assert "Descarga la plantilla oficial" in message


def test_sheet_without_data_rows_is_rejected() -> None:
    content = build_xlsx([[None] * len(PRODUCT_HEADERS)])

    with pytest.raises(SpreadsheetParseError, match="no contiene productos"):
        parse_product_rows(content)


def test_unreadable_content_is_a_parse_error() -> None:
    with pytest.raises(SpreadsheetParseError):
        parse_product_rows(b"not an excel file")


def test_row_limit_is_enforced() -> None:
    content = build_xlsx([product_row(modelo=f"M{index}") for index in range(4)])

    with pytest.raises(BulkUploadInputError, match="máximo permitido es 3"):
        parse_product_rows(content, max_rows=3)


def test_normalize_header_collapses_whitespace() -> None:
    assert normalize_header("  Precio   DIA ") == "precio dia"
    assert normalize_header(None) == ""
