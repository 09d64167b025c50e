"""Field rules applied to each spreadsheet row before it can be created."""

from __future__ import annotations

from collections.abc import Mapping

from app.domain.entities import ExcelRow, ValidationError
from app.utils import current_year_in_app_timezone

MIN_YEAR = 1980
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
BRAND_MIN_LENGTH = 2
BRAND_MAX_LENGTH = 50
MODEL_MIN_LENGTH = 2
MODEL_MAX_LENGTH = 50
CATEGORY_MIN_LENGTH = 3
CAPACITY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
_PREVIEW_LENGTH = 50


def _preview(value: str) -> str:
    return f"{value[:_PREVIEW_LENGTH]}..."


def _as_text(value) -> str | None:
    if value is None:
        return None
    return str(value)


def validate_row(
    row: ExcelRow,
    image_lookup: Mapping[str, str],
    *,
    current_year: int | None = None,
) -> list[ValidationError]:
    """Return every rule violation found in ``row``.

    All rules are evaluated; the result is empty when the row is valid.
    ``image_lookup`` maps uploaded file names to their URLs and is matched
    case-sensitively.
    """

    year_limit = (current_year or current_year_in_app_timezone()) + 1
    errors: list[ValidationError] = []

    def add(field: str, message: str, value=None) -> None:
        errors.append(
            ValidationError(
                row_number=row.row_number,
                field=field,
                message=message,
                value=_as_text(value),
            )
        )

    nombre = (row.nombre or "").strip()
    if len(nombre) < NAME_MIN_LENGTH:
        add(
            "nombre",
            "El nombre es requerido y debe tener al menos 3 caracteres",
            row.nombre,
        )
    elif len(nombre) > NAME_MAX_LENGTH:
        add("nombre", "El nombre no puede exceder 100 caracteres", nombre)

    marca = (row.marca or "").strip()
    if len(marca) < BRAND_MIN_LENGTH:
        add(
            "marca",
            "La marca es requerida y debe tener al menos 2 caracteres "
            "(ej: CAT, Komatsu, JCB)",
            row.marca,
        )
    elif len(marca) > BRAND_MAX_LENGTH:
        add("marca", "La marca no puede exceder 50 caracteres", marca)

    modelo = (row.modelo or "").strip()
    if len(modelo) < MODEL_MIN_LENGTH:
        add(
            "modelo",
            "El modelo es requerido y debe tener al menos 2 caracteres "
            "(ej: 320D, PC200)",
            row.modelo,
        )
    elif len(modelo) > MODEL_MAX_LENGTH:
        add("modelo", "El modelo no puede exceder 50 caracteres", modelo)

    categoria = (row.categoria or "").strip()
    if len(categoria) < CATEGORY_MIN_LENGTH:
        add(
            "categoria",
            "La categoría es requerida y debe tener al menos 3 caracteres "
            "(ej: Excavadora, Retroexcavadora)",
            row.categoria,
        )

    if row.anio is None:
        add("anio", "El año de fabricación es requerido y debe ser un número")
    elif row.anio < MIN_YEAR or row.anio > year_limit:
        add("anio", f"El año debe estar entre {MIN_YEAR} y {year_limit}", row.anio)

    if row.precio_dia is None:
        add("precio_dia", "El precio por día es requerido y debe ser un número")
    elif row.precio_dia <= 0:
        add("precio_dia", "El precio por día debe ser mayor a 0", row.precio_dia)

    optional_positive = (
        ("precio_hora", row.precio_hora, "El precio por hora debe ser mayor a 0"),
        ("precio_semana", row.precio_semana, "El precio por semana debe ser mayor a 0"),
        ("precio_mes", row.precio_mes, "El precio por mes debe ser mayor a 0"),
        ("peso", row.peso, "El peso (toneladas) debe ser mayor a 0"),
        ("potencia", row.potencia, "La potencia (HP) debe ser mayor a 0"),
    )
    for field, value, message in optional_positive:
        if value is not None and value <= 0:
            add(field, message, value)

    if row.capacidad and len(row.capacidad) > CAPACITY_MAX_LENGTH:
        add(
            "capacidad",
            "La capacidad no puede exceder 100 caracteres",
            _preview(row.capacidad),
        )

    if row.stock is None:
        add("stock", "El stock es requerido y debe ser un número entero")
    elif row.stock < 0:
        add("stock", "El stock no puede ser negativo", row.stock)

    if row.disponible is None:
        add("disponible", "El campo disponible es requerido (TRUE o FALSE)", "")

    if row.descripcion and len(row.descripcion) > DESCRIPTION_MAX_LENGTH:
        add(
            "descripcion",
            "La descripción no puede exceder 500 caracteres",
            _preview(row.descripcion),
        )

    imagen = (row.imagen or "").strip()
    if imagen and imagen not in image_lookup:
        add(
            "imagen",
            f'La imagen "{imagen}" no fue subida. '
            "Verifique el nombre exacto (case-sensitive)",
            imagen,
        )

    return errors


__all__ = ["MIN_YEAR", "validate_row"]
