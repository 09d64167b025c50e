"""Tests for the authentication token endpoint."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from conftest import create_db_user, login

from app.infrastructure.database import SessionLocal
from app.infrastructure.models import UserModel


def test_login_returns_bearer_token_and_records_login(api_client) -> None:
    user_id = create_db_user(email="admin@example.com", password="StrongPass123")

    response = api_client.post(
        "/auth/token",
        data={"username": "admin@example.com", "password": "StrongPass123"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "admin"
    assert payload["access_token"]
    with SessionLocal() as session:
        assert session.get(UserModel, user_id).last_login is not None


def test_wrong_password_is_rejected(api_client) -> None:
    create_db_user(email="admin@example.com", password="StrongPass123")

    response = api_client.post(
        "/auth/token",
        data={"username": "admin@example.com", "password": "nope"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Credenciales incorrectas"


def test_inactive_user_cannot_log_in(api_client) -> None:
    create_db_user(email="old@example.com", password="StrongPass123", is_active=False)

    response = api_client.post(
        "/auth/token",
        data={"username": "old@example.com", "password": "StrongPass123"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 403


def test_password_change_invalidates_existing_token(api_client) -> None:
    user_id = create_db_user(email="admin@example.com", password="StrongPass123")
    headers = login(api_client, "admin@example.com", "StrongPass123")

    assert api_client.get("/audit-logs/", headers=headers).status_code == 200

    with SessionLocal() as session:
        user = session.get(UserModel, user_id)
        user.password = "changed-hash"
        session.commit()

    response = api_client.get("/audit-logs/", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Credenciales inválidas"
