"""ORM models used by the application infrastructure."""

from .audit_log import AuditLogModel
from .role import RoleModel
from .user import UserModel
from .vehicle import VehicleModel

__all__ = [
    "AuditLogModel",
    "RoleModel",
    "UserModel",
    "VehicleModel",
]
