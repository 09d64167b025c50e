"""Shared fixtures: a throwaway SQLite database and helpers to build workbooks."""

from __future__ import annotations

import os
import sys
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Any, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "catalog_admin_api_tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "America/Lima"
os.environ.pop("AZURE_STORAGE_CONNECTION_STRING", None)
os.environ.pop("AZURE_STORAGE_CONTAINER_NAME", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from openpyxl import Workbook  # noqa: E402

from app.domain.entities import Role, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)

PRODUCT_HEADERS = (
    "nombre",
    "marca",
    "modelo",
    "categoria",
    "anio",
    "precio_dia",
    "stock",
    "disponible",
    "imagen",
)


def product_row(**overrides: Any) -> list[Any]:
    """Return the cells of a valid row laid out as :data:`PRODUCT_HEADERS`."""

    values = {
        "nombre": "Excavadora Hidráulica 320D",
        "marca": "CAT",
        "modelo": "320D",
        "categoria": "Excavadora",
        "anio": 2020,
        "precio_dia": 1500,
        "stock": 3,
        "disponible": "TRUE",
        "imagen": None,
    }
    values.update(overrides)
    return [values[header] for header in PRODUCT_HEADERS]


def build_xlsx(
    rows: Sequence[Sequence[Any]],
    *,
    headers: Sequence[str] = PRODUCT_HEADERS,
    sheet_title: str = "Productos",
    extra_sheets: Sequence[str] = (),
) -> bytes:
    """Return the bytes of a workbook with ``headers`` followed by ``rows``."""

    workbook = Workbook()
    for title in extra_sheets:
        workbook.create_sheet(title=title).append(["otra", "hoja"])
    worksheet = workbook.active
    worksheet.title = sheet_title
    worksheet.append(list(headers))
    for row in rows:
        worksheet.append(list(row))
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def make_user(alias: str = "admin", *, user_id: int = 1, is_active: bool = True) -> User:
    return User(
        id=user_id,
        role=Role(id=1, name=alias.title(), alias=alias),
        name="Operador",
        email=f"{alias}@example.com",
        password="hashed",
        last_login=None,
        created_at=None,
        is_active=is_active,
    )


@pytest.fixture()
def db_session():
    """Yield a session bound to a freshly created schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def admin_user() -> User:
    return make_user("admin")


def create_db_user(
    *,
    email: str,
    password: str,
    role_alias: str = "admin",
    is_active: bool = True,
) -> int:
    """Insert a user with ``role_alias`` directly through the ORM."""

    from app.infrastructure.models import RoleModel, UserModel
    from app.infrastructure.security import get_password_hash

    with SessionLocal() as session:
        role = session.query(RoleModel).filter_by(alias=role_alias).first()
        if role is None:
            role = RoleModel(name=role_alias.title(), alias=role_alias)
            session.add(role)
            session.commit()
            session.refresh(role)

        user = UserModel(
            role_id=role.id,
            name="Test User",
            email=email,
            password=get_password_hash(password),
            is_active=is_active,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user.id


@pytest.fixture()
def api_client():
    """Return a test client bound to a clean schema."""

    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from main import create_app

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    with TestClient(create_app()) as client:
        yield client
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def login(client, email: str, password: str) -> dict[str, str]:
    """Return the authorization header for ``email``."""

    response = client.post(
        "/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
