"""Schemas exposed by the bulk upload endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedImageSchema(BaseModel):
    file_name: str
    url: str
    size: int = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)


class ImageUploadResponse(BaseModel):
    images: list[UploadedImageSchema]
    errors: list[str]
    message: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ValidatedProductSchema(BaseModel):
    """A product accepted by the validation phase, as sent back to commit it."""

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

    model_config = ConfigDict(from_attributes=True)


class DuplicateProductRead(BaseModel):
    row_number: int
    nombre: str
    categoria: str
    existing_id: int

    model_config = ConfigDict(from_attributes=True)


class ValidationErrorSchema(BaseModel):
    row_number: int
    field: str
    message: str
    value: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ValidationResultRead(BaseModel):
    to_create: list[ValidatedProductSchema]
    duplicates: list[DuplicateProductRead]
    errors: list[ValidationErrorSchema]

    model_config = ConfigDict(from_attributes=True)


class BulkUploadCommitRequest(BaseModel):
    products: list[ValidatedProductSchema]


class BulkUploadResultRead(BaseModel):
    success: bool
    created: int
    duplicates_skipped: int
    errors: int
    created_ids: list[int]
    error_details: list[ValidationErrorSchema] | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "BulkUploadCommitRequest",
    "BulkUploadResultRead",
    "DuplicateProductRead",
    "ImageUploadResponse",
    "UploadedImageSchema",
    "ValidatedProductSchema",
    "ValidationErrorSchema",
    "ValidationResultRead",
]
