"""Value objects exchanged between the stages of a bulk catalog upload."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UploadedImage:
    """An image accepted by the image registry during an upload session."""

    file_name: str
    url: str
    size: int


@dataclass
class ExcelRow:
    """One physical spreadsheet row with its cells coerced to typed values.

    ``row_number`` is 1-based and counts the header, so the first data row is 2.
    Blank or unparsable optional cells are ``None``.
    """

    row_number: int
    nombre: str | None = None
    marca: str | None = None
    modelo: str | None = None
    categoria: str | None = None
    anio: int | None = None
    precio_dia: float | None = None
    precio_hora: float | None = None
    precio_semana: float | None = None
    precio_mes: float | None = None
    peso: float | None = None
    potencia: float | None = None
    capacidad: str | None = None
    especificaciones: str | None = None
    stock: int | None = None
    disponible: bool | None = None
    descripcion: str | None = None
    imagen: str | None = None


@dataclass
class ValidatedProduct:
    """A row that passed every check and is ready to be created."""

    row_number: int
    nombre: str
    marca: str
    modelo: str
    categoria: str
    anio: int
    precio_dia: float
    stock: int
    disponible: bool
    precio_hora: float | None = None
    precio_semana: float | None = None
    precio_mes: float | None = None
    peso: float | None = None
    potencia: float | None = None
    capacidad: str | None = None
    especificaciones: str | None = None
    descripcion: str | None = None
    imagen: str | None = None
    imagen_url: str | None = None


@dataclass(frozen=True)
class DuplicateProduct:
    """A row whose identity already exists in the catalog."""

    row_number: int
    nombre: str
    categoria: str
    existing_id: int


@dataclass(frozen=True)
class ValidationError:
    """A single rule violation reported for a row (not an exception)."""

    row_number: int
    field: str
    message: str
    value: str | None = None


@dataclass
class ValidationResult:
    """Three-way partition of the rows of one spreadsheet."""

    to_create: list[ValidatedProduct] = field(default_factory=list)
    duplicates: list[DuplicateProduct] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)


@dataclass
class BulkUploadResult:
    """Tally of a commit of previously validated products."""

    success: bool
    created: int
    duplicates_skipped: int
    errors: int
    created_ids: list[int] = field(default_factory=list)
    error_details: list[ValidationError] | None = None


@dataclass
class ImageUploadResult:
    """Images accepted by the registry plus per-file rejection messages."""

    images: list[UploadedImage] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


__all__ = [
    "BulkUploadResult",
    "DuplicateProduct",
    "ExcelRow",
    "ImageUploadResult",
    "UploadedImage",
    "ValidatedProduct",
    "ValidationError",
    "ValidationResult",
]
