"""
Shared fixtures: an in-memory SQLite database, a fresh session store and a
TestClient wired to both.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from cinerank.api.dependencies import get_db
from cinerank.api.main import create_app
from cinerank.core.security import hash_password
from cinerank.core.sessions import InMemorySessionStore
from cinerank.database import crud
from cinerank.database.connection import DatabaseManager
from cinerank.database.models import ROLE_ADMIN


@pytest.fixture
def db_manager():
    """In-memory SQLite database with all tables."""
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Database session for direct crud calls."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def client(db_manager, session_store):
    """TestClient for an app bound to the test database and session store."""
    app = create_app(session_store=session_store)

    def override_get_db():
        with db_manager.session_scope() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_user(session):
    """Factory creating users with a known password."""
    def _make_user(username="alice", email=None, password="secret123", role="user"):
        return crud.create_user(
            session,
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
    return _make_user


def _login(client, email, password="secret123"):
    """Log in through the form and return the response."""
    return client.post(
        "/login",
        data={"email": email, "password": password},
        follow_redirects=False,
    )


@pytest.fixture
def user_client(client, make_user):
    """Client logged in as a regular user."""
    user = make_user("alice")
    assert _login(client, user.email).status_code == 303
    client.user_id = user.id
    return client


@pytest.fixture
def admin_client(client, make_user):
    """Client logged in as an admin."""
    admin = make_user("root", role=ROLE_ADMIN)
    assert _login(client, admin.email).status_code == 303
    client.user_id = admin.id
    return client


@pytest.fixture
def login(client):
    """Log the test client in; returns the login response."""
    def _do_login(email, password="secret123"):
        return _login(client, email, password)
    return _do_login
