from .audit_log import AuditLogRead
from .auth import Token
from .bulk_upload import (
    BulkUploadCommitRequest,
    BulkUploadResultRead,
    DuplicateProductRead,
    ImageUploadResponse,
    UploadedImageSchema,
    ValidatedProductSchema,
    ValidationErrorSchema,
    ValidationResultRead,
)
from .vehicle import VehicleRead

__all__ = [
    "AuditLogRead",
    "BulkUploadCommitRequest",
    "BulkUploadResultRead",
    "DuplicateProductRead",
    "ImageUploadResponse",
    "Token",
    "UploadedImageSchema",
    "ValidatedProductSchema",
    "ValidationErrorSchema",
    "ValidationResultRead",
    "VehicleRead",
]
