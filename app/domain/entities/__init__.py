"""Domain entities exposed by the application."""

from .audit_log import (
    AUDIT_OPERATION_CREATE,
    AUDIT_OPERATION_DELETE,
    AUDIT_OPERATION_UPDATE,
    AuditContext,
    AuditLog,
)
from .bulk_upload import (
    BulkUploadResult,
    DuplicateProduct,
    ExcelRow,
    ImageUploadResult,
    UploadedImage,
    ValidatedProduct,
    ValidationError,
    ValidationResult,
)
from .role import Role
from .user import ADMIN_ROLE_ALIASES, User
from .vehicle import (
    VEHICLE_STATUS_AVAILABLE,
    VEHICLE_STATUS_OUT_OF_SERVICE,
    Vehicle,
    VehicleIdentity,
)

__all__ = [
    "ADMIN_ROLE_ALIASES",
    "AUDIT_OPERATION_CREATE",
    "AUDIT_OPERATION_DELETE",
    "AUDIT_OPERATION_UPDATE",
    "AuditContext",
    "AuditLog",
    "BulkUploadResult",
    "DuplicateProduct",
    "ExcelRow",
    "ImageUploadResult",
    "Role",
    "UploadedImage",
    "User",
    "VEHICLE_STATUS_AVAILABLE",
    "VEHICLE_STATUS_OUT_OF_SERVICE",
    "ValidatedProduct",
    "ValidationError",
    "ValidationResult",
    "Vehicle",
    "VehicleIdentity",
]
