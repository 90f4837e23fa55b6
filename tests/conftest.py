"""
Shared fixtures.

Every test gets a fresh in-memory SQLite store; the app's get_db
dependency is pointed at it. The lifespan hook is not run, so no
default categories exist unless a test seeds them.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["SEED_DEFAULT_CATEGORIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client, email, password="password123", name=None):
    payload = {"email": email, "password": password}
    if name:
        payload["name"] = name
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text

    response = client.post(
        "/auth/token", data={"username": email, "password": password}
    )
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    return register_and_login(client, "alice@example.com", name="Alice")


@pytest.fixture
def bob(client):
    return register_and_login(client, "bob@example.com", name="Bob")
