"""Authorization guard shared by the bulk upload operations."""

from app.domain.entities import User


def ensure_admin(user: User) -> None:
    """Raise :class:`PermissionError` unless ``user`` is an active administrator."""

    if not user.is_active or not user.is_admin():
        raise PermissionError("Solo los administradores pueden realizar cargas masivas")


__all__ = ["ensure_admin"]
