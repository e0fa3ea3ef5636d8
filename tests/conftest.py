"""Shared fixtures: an app on in-memory SQLite, a test client and users with tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

from health_tracker import create_app
from health_tracker.extensions import db
from health_tracker.models import User
from health_tracker.services import users as user_service


@pytest.fixture
def app() -> Iterator[Flask]:
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def make_user(app: Flask) -> Callable[..., User]:
    def _make_user(username: str = "alice", email: str | None = None, password: str = "secret123") -> User:
        return user_service.create_user(
            db.session,
            {"username": username, "email": email or f"{username}@example.com", "password": password},
        )

    return _make_user


@pytest.fixture
def user(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob")


def bearer(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(identity=str(user_id))}"}


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    return bearer(user.id)


@pytest.fixture
def other_headers(other_user: User) -> dict[str, str]:
    return bearer(other_user.id)


@pytest.fixture
def create_record(client: FlaskClient, auth_headers: dict[str, str]) -> Callable[..., dict]:
    """POST a record as ``user`` and return the created record JSON."""

    def _create(headers: dict[str, str] | None = None, **payload) -> dict:
        response = client.post("/api/records", json=payload, headers=headers or auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["record"]

    return _create
