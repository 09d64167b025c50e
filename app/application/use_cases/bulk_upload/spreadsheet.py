"""Reading of bulk upload workbooks into typed product rows."""

from __future__ import annotations

import importlib
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from io import BytesIO
from typing import Any

from app.domain.entities import ExcelRow

from .errors import BulkUploadInputError, SpreadsheetParseError

PREFERRED_SHEET_NAME = "Productos"

REQUIRED_COLUMNS: tuple[str, ...] = (
    "nombre",
    "marca",
    "modelo",
    "categoria",
    "anio",
    "precio_dia",
    "stock",
    "disponible",
)
OPTIONAL_COLUMNS: tuple[str, ...] = (
    "precio_hora",
    "precio_semana",
    "precio_mes",
    "peso",
    "potencia",
    "capacidad",
    "especificaciones",
    "descripcion",
    "imagen",
)
# Column order used by the downloadable template.
TEMPLATE_COLUMNS: tuple[str, ...] = (
    "nombre",
    "marca",
    "modelo",
    "categoria",
    "anio",
    "precio_dia",
    "precio_hora",
    "precio_semana",
    "precio_mes",
    "peso",
    "potencia",
    "capacidad",
    "especificaciones",
    "stock",
    "disponible",
    "descripcion",
    "imagen",
)

_TEXT_COLUMNS = frozenset(
    {
        "nombre",
        "marca",
        "modelo",
        "categoria",
        "capacidad",
        "especificaciones",
        "descripcion",
        "imagen",
    }
)
_INTEGER_COLUMNS = frozenset({"anio", "stock"})
_FLOAT_COLUMNS = frozenset(
    {"precio_dia", "precio_hora", "precio_semana", "precio_mes", "peso", "potencia"}
)
_BOOLEAN_COLUMNS = frozenset({"disponible"})

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass
class ParsedSheet:
    """Normalized headers plus the raw cells of every physical row below them.

    ``rows`` maps the 1-based physical row number to its cells; blank rows are
    absent but the numbering of the remaining rows is untouched.
    """

    sheet_name: str
    headers: list[str]
    rows: dict[int, list[Any]]


@lru_cache(maxsize=1)
def _get_pandas_module() -> Any:
    """Load :mod:`pandas` lazily so importing the API stays cheap."""

    return importlib.import_module("pandas")


def normalize_header(value: Any) -> str:
    """Lowercase, trim and collapse internal whitespace of a header cell."""

    cleaned = _normalize_cell_value(value)
    if cleaned is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", str(cleaned)).strip().lower()


def read_product_sheet(file_bytes: bytes, *, max_rows: int | None = None) -> ParsedSheet:
    """Read the product sheet of an ``.xlsx``/``.xls`` workbook.

    The sheet named ``Productos`` is preferred; otherwise the first sheet is
    used. Raises :class:`SpreadsheetParseError` when the workbook cannot be
    read, has no sheets, no data rows or lacks required columns, and
    :class:`BulkUploadInputError` when it holds more than ``max_rows`` rows.
    """

    pd = _get_pandas_module()
    try:
        sheets: Mapping[str, Any] = pd.read_excel(
            BytesIO(file_bytes),
            sheet_name=None,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_values=[""],
        )
    except Exception as exc:  # pandas surfaces engine specific exception types
        raise SpreadsheetParseError(
            "No se pudo leer el archivo Excel. Verifica que no esté dañado"
        ) from exc

    if not sheets:
        raise SpreadsheetParseError("El archivo no contiene hojas de datos")

    sheet_name = (
        PREFERRED_SHEET_NAME if PREFERRED_SHEET_NAME in sheets else next(iter(sheets))
    )
    dataframe = sheets[sheet_name]

    raw_rows: list[list[Any]] = [
        [_normalize_cell_value(value) for value in row]
        for row in dataframe.itertuples(index=False, name=None)
    ]
    if len(raw_rows) < 2:
        raise SpreadsheetParseError("El archivo no contiene productos para procesar")

    headers = [normalize_header(value) for value in raw_rows[0]]
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise SpreadsheetParseError(
            "Formato inválido. Columnas requeridas faltantes: "
            f"{', '.join(missing)}. Descarga la plantilla oficial."
        )

    data_rows: dict[int, list[Any]] = {}
    for index, cells in enumerate(raw_rows[1:], start=2):
        if all(cell is None for cell in cells):
            continue
        data_rows[index] = cells

    if not data_rows:
        raise SpreadsheetParseError("El archivo no contiene productos para procesar")

    if max_rows is not None and len(data_rows) > max_rows:
        raise BulkUploadInputError(
            f"El archivo contiene {len(data_rows)} productos. "
            f"El máximo permitido es {max_rows} productos por archivo"
        )

    return ParsedSheet(sheet_name=sheet_name, headers=headers, rows=data_rows)


def build_excel_rows(sheet: ParsedSheet) -> list[ExcelRow]:
    """Coerce the raw cells of ``sheet`` into :class:`ExcelRow` values.

    Unknown columns are ignored; when a header repeats, its first occurrence wins.
    """

    column_index: dict[str, int] = {}
    for position, header in enumerate(sheet.headers):
        if header and header not in column_index:
            column_index[header] = position

    rows: list[ExcelRow] = []
    for row_number, cells in sheet.rows.items():
        values: dict[str, Any] = {}
        for column in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
            position = column_index.get(column)
            raw = cells[position] if position is not None and position < len(cells) else None
            values[column] = _coerce_column(column, raw)
        rows.append(ExcelRow(row_number=row_number, **values))
    return rows


def parse_product_rows(
    file_bytes: bytes, *, max_rows: int | None = None
) -> list[ExcelRow]:
    """Return the typed non-blank product rows of the workbook in ``file_bytes``."""

    return build_excel_rows(read_product_sheet(file_bytes, max_rows=max_rows))


def _coerce_column(column: str, value: Any) -> Any:
    if column in _TEXT_COLUMNS:
        return _parse_text(value)
    if column in _INTEGER_COLUMNS:
        return _parse_integer(value)
    if column in _FLOAT_COLUMNS:
        return _parse_float(value)
    if column in _BOOLEAN_COLUMNS:
        return _parse_flag(value)
    return value


def _normalize_cell_value(value: Any) -> Any:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    pd = _get_pandas_module()
    if value is pd.NaT or value is pd.NA:
        return None
    return value


def _parse_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _parse_integer(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        decimal_value = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not decimal_value.is_finite():
        return None
    if decimal_value != decimal_value.to_integral_value():
        return None
    return int(decimal_value)


def _parse_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        try:
            number = float(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError):
            return None
    if not math.isfinite(number):
        return None
    return number


def _parse_flag(value: Any) -> bool | None:
    if value is None:
        return None
    return str(value).strip().upper() == "TRUE"


__all__ = [
    "OPTIONAL_COLUMNS",
    "PREFERRED_SHEET_NAME",
    "ParsedSheet",
    "REQUIRED_COLUMNS",
    "TEMPLATE_COLUMNS",
    "build_excel_rows",
    "normalize_header",
    "parse_product_rows",
    "read_product_sheet",
]
