"""Domain entity representing a back-office user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role

ADMIN_ROLE_ALIASES = frozenset({"admin", "administrador"})


@dataclass
class User:
    """Core attributes describing an operator of the back-office."""

    id: int | None
    role: Role
    name: str
    email: str
    password: str
    last_login: datetime | None
    created_at: datetime | None
    is_active: bool
    deleted: bool = False

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user may manage the catalog."""

        return self.role.alias.lower() in ADMIN_ROLE_ALIASES


__all__ = ["ADMIN_ROLE_ALIASES", "User"]
