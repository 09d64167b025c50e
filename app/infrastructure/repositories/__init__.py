"""Repository implementations for infrastructure layer."""

from .audit_log_repository import AuditLogRepository
from .role_repository import RoleRepository
from .user_repository import UserRepository
from .vehicle_repository import VehicleRepository

__all__ = [
    "AuditLogRepository",
    "RoleRepository",
    "UserRepository",
    "VehicleRepository",
]
