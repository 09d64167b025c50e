"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Credenciales inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("Usuario no encontrado")

    # Password or status changes invalidate previously issued tokens.
    if signature_claim != password_signature(user.password, user.is_active):
        raise _credentials_error()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No autorizado",
        )
    return current_user


__all__ = [
    "get_current_active_user",
    "get_current_user",
    "oauth2_scheme",
    "require_admin",
    "resolve_current_user",
]
