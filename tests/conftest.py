"""Shared fixtures: in-memory database, API client and role tokens."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.core.database import Database, get_db
from app.main import app
from app.models.manager import Manager
from app.models.tenant import Tenant
from tests.factories import MANAGER_ID, TENANT_ID, auth_headers, make_manager, make_tenant


@pytest.fixture
def database():
    """Create an in-memory test database."""
    db = Database("sqlite:///:memory:", poolclass=StaticPool)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def test_db(database):
    """Session bound to the in-memory database."""
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def manager_headers() -> dict[str, str]:
    return auth_headers("manager", MANAGER_ID)


@pytest.fixture
def tenant_headers() -> dict[str, str]:
    return auth_headers("tenant", TENANT_ID)


@pytest.fixture
def manager(test_db: Session) -> Manager:
    return make_manager(test_db)


@pytest.fixture
def tenant(test_db: Session) -> Tenant:
    return make_tenant(test_db)
