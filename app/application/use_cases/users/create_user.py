"""Use case for creating back-office users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import RoleRepository, UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import ensure_app_naive_datetime, now_in_app_timezone

ROLE_NAMES = {"admin": "Administrador"}


def create_user(
    session: Session,
    *,
    name: str,
    role_alias: str,
    email: str,
    password: str,
) -> User:
    """Create a new user with a unique email, creating its role when missing."""

    repository = UserRepository(session)
    normalized_email = email.strip().lower()

    if repository.get_by_email(normalized_email):
        raise ValueError("El correo electrónico ya está registrado")

    alias = role_alias.strip().lower()
    if not alias:
        raise ValueError("Rol no permitido")
    role = RoleRepository(session).get_or_create(
        alias=alias, name=ROLE_NAMES.get(alias, alias.title())
    )

    user = User(
        id=None,
        role=role,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        last_login=None,
        created_at=ensure_app_naive_datetime(now_in_app_timezone()),
        is_active=True,
    )
    return repository.create(user)
