"""Utility helpers for generating downloadable Excel workbooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

EXCEL_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
_MIN_COLUMN_WIDTH = 10
_MAX_COLUMN_WIDTH = 60


@dataclass
class SheetData:
    """Content of one worksheet; ``headers`` are styled and frozen when present."""

    title: str
    headers: Sequence[str] = ()
    rows: Sequence[Sequence[Any]] = field(default_factory=list)


def _style_header(worksheet) -> None:
    header_fill = PatternFill(fill_type="solid", fgColor="4F81BD")
    header_font = Font(color="FFFFFFFF", bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in worksheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment
    worksheet.freeze_panes = "A2"


def _fit_columns(worksheet) -> None:
    for index, column in enumerate(worksheet.iter_cols(), start=1):
        longest = max(
            (len(str(cell.value)) for cell in column if cell.value is not None),
            default=0,
        )
        width = min(max(longest + 2, _MIN_COLUMN_WIDTH), _MAX_COLUMN_WIDTH)
        worksheet.column_dimensions[get_column_letter(index)].width = width


def build_workbook(sheets: Sequence[SheetData]) -> bytes:
    """Render ``sheets`` into an ``.xlsx`` document and return its bytes."""

    workbook = Workbook()
    workbook.remove(workbook.active)

    for sheet in sheets:
        worksheet = workbook.create_sheet(title=sheet.title)
        if sheet.headers:
            worksheet.append(list(sheet.headers))
            _style_header(worksheet)
        for row in sheet.rows:
            worksheet.append(list(row))
        _fit_columns(worksheet)

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


__all__ = ["EXCEL_CONTENT_TYPE", "SheetData", "build_workbook"]
