"""Downloadable workbooks supporting a bulk upload: template and error report."""

from __future__ import annotations

from collections.abc import Sequence

from app.config import get_settings
from app.domain.entities import User, ValidationError
from app.infrastructure.workbooks import SheetData, build_workbook

from .access import ensure_admin
from .spreadsheet import PREFERRED_SHEET_NAME, TEMPLATE_COLUMNS

TEMPLATE_FILENAME = "plantilla_carga_masiva.xlsx"
ERROR_REPORT_FILENAME = "errores_carga_masiva.xlsx"

_EXAMPLE_ROWS: tuple[tuple, ...] = (
    ("Excavadora Hidráulica 320D", "CAT", "320D", "Excavadora", 2020, 1500, 200, 9000, 35000, 20.5, 150, "1.2 m³", "Alcance: 10m|Profundidad: 6.5m", 3, "TRUE", "Excavadora hidráulica de alto rendimiento para obras medianas y grandes", "excavadora-cat-320.jpg"),
    ("Retroexcavadora Versátil", "JCB", "3CX", "Retroexcavadora", 2021, 800, 120, 4800, 18000, 8.5, 92, "0.25 m³", "Profundidad excavación: 5.5m", 5, "TRUE", "Retroexcavadora versátil para múltiples trabajos de construcción", "retroexcavadora-jcb.jpg"),
    ("Rodillo Compactador", "Bomag", "BW120", "Compactadora", 2019, 450, 70, 2700, 10000, 2.5, 25, None, "Ancho tambor: 1.2m|Vibración: Si", 2, "TRUE", "Rodillo compactador vibratorio para suelos y asfalto", None),
    ("Grúa Torre Industrial", "Liebherr", "280EC-H", "Grúa", 2022, 3500, 500, 21000, 80000, 45, 75, "12 ton", "Altura máx: 60m|Alcance: 50m", 1, "FALSE", "Grúa torre para grandes construcciones de edificios", "grua-torre.png"),
    ("Cargador Frontal", "Komatsu", "WA320", "Cargador", 2020, 1200, 180, 7200, 28000, 15.8, 165, "2.5 m³", "Capacidad cuchara: 2.5m³", 4, "TRUE", "Cargador frontal de ruedas para movimiento de materiales", "cargador-komatsu.jpg"),
)


def _instructions(max_rows: int, max_file_mb: int, max_image_mb: int) -> list[tuple[str]]:
    lines = [
        "INSTRUCCIONES DE USO - CARGA MASIVA DE MAQUINARIA",
        "",
        "=== PASO 1: SUBIR IMÁGENES ===",
        '- Suba primero las imágenes de los productos en la sección "Subir Imágenes"',
        "- Anote los nombres exactos de los archivos (son case-sensitive)",
        f"- Formatos aceptados: JPG, PNG, GIF, WEBP (máx {max_image_mb}MB por imagen)",
        "",
        "=== PASO 2: COMPLETAR PLANTILLA ===",
        f'- Complete la hoja "{PREFERRED_SHEET_NAME}" con los datos de cada máquina',
        "- No modifique los nombres de las columnas de la fila 1",
        "",
        "=== CAMPOS ESENCIALES (REQUERIDOS) ===",
        "- nombre: Nombre comercial del producto (mín 3, máx 100 caracteres)",
        "- marca: Fabricante de la máquina (ej: CAT, Komatsu, JCB, Liebherr, Bobcat)",
        "- modelo: Modelo específico (ej: 320D, PC200, 3CX)",
        "- categoria: Tipo de máquina (ej: Excavadora, Retroexcavadora, Grúa, Cargador)",
        "- anio: Año de fabricación (entre 1980 y año actual + 1)",
        "",
        "=== PRECIOS (precio_dia REQUERIDO) ===",
        "- precio_dia: Precio de alquiler por día en soles (requerido, > 0)",
        "- precio_hora: Precio por hora (opcional, > 0)",
        "- precio_semana: Precio por semana (opcional, > 0)",
        "- precio_mes: Precio por mes (opcional, > 0)",
        "",
        "=== ESPECIFICACIONES (OPCIONALES) ===",
        "- peso: Peso operativo en toneladas (ej: 20.5 para 20.5 ton)",
        "- potencia: Potencia del motor en HP (ej: 150)",
        '- capacidad: Capacidad de carga o cuchara (ej: "1.2 m³" o "12 ton")',
        '- especificaciones: Otras especificaciones formato "Clave: Valor|Clave: Valor"',
        "",
        "=== CONTROL (stock y disponible REQUERIDOS) ===",
        "- stock: Cantidad de unidades disponibles (número entero >= 0)",
        "- disponible: TRUE si está disponible, FALSE si no (exactamente así)",
        "- descripcion: Descripción detallada del producto (máx 500 caracteres)",
        "",
        "=== IMAGEN (OPCIONAL) ===",
        "- imagen: Nombre EXACTO del archivo de imagen subido previamente (case-sensitive)",
        "",
        "=== DETECCIÓN DE DUPLICADOS ===",
        "- Un producto se considera duplicado si ya existe con misma MARCA + MODELO + CATEGORÍA",
        "- La comparación ignora mayúsculas/minúsculas y espacios adicionales",
        "- Los duplicados se mostrarán en la vista previa pero NO se crearán",
        "- Un producto repetido dentro del mismo archivo se reporta como error",
        "",
        "=== LÍMITES ===",
        f"- Máximo {max_rows} productos por archivo",
        f"- Tamaño máximo del Excel: {max_file_mb}MB",
    ]
    return [(line,) for line in lines]


def build_template_workbook(*, user: User) -> bytes:
    """Return the official bulk upload template with examples and instructions."""

    ensure_admin(user)
    settings = get_settings()
    megabyte = 1024 * 1024
    return build_workbook(
        [
            SheetData(
                title=PREFERRED_SHEET_NAME,
                headers=TEMPLATE_COLUMNS,
                rows=_EXAMPLE_ROWS,
            ),
            SheetData(
                title="Instrucciones",
                rows=_instructions(
                    settings.bulk_upload_max_rows,
                    settings.bulk_upload_max_file_bytes // megabyte,
                    settings.bulk_upload_max_image_bytes // megabyte,
                ),
            ),
        ]
    )


def build_error_report_workbook(
    *, user: User, errors: Sequence[ValidationError]
) -> bytes:
    """Return a workbook listing ``errors`` ordered by row so they can be fixed."""

    ensure_admin(user)
    ordered = sorted(errors, key=lambda error: error.row_number)
    return build_workbook(
        [
            SheetData(
                title="Errores",
                headers=("fila", "campo", "mensaje", "valor"),
                rows=[
                    (error.row_number, error.field, error.message, error.value)
                    for error in ordered
                ],
            )
        ]
    )


__all__ = [
    "ERROR_REPORT_FILENAME",
    "TEMPLATE_FILENAME",
    "build_error_report_workbook",
    "build_template_workbook",
]
