"""Use case for registering the last login of a user."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import UserRepository
from app.utils import ensure_app_naive_datetime, now_in_app_timezone


def record_login(session: Session, user_id: int) -> None:
    """Persist the last login timestamp for the given user."""

    repository = UserRepository(session)
    repository.update_last_login(
        user_id, ensure_app_naive_datetime(now_in_app_timezone())
    )
