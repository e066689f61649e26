import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.main import app
from app.core.config import Settings, get_settings
from app.dependencies import get_db

ADMIN_TOKEN = "test-admin-token"

@pytest.fixture
def engine():
    """
    In-memory SQLite shared across sessions, so every request in a test
    sees the same key-value store.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session

@pytest.fixture
def test_settings():
    return Settings(ADMIN_TOKEN=ADMIN_TOKEN, DATABASE_URL="sqlite://")

@pytest.fixture
def client(engine, test_settings):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def admin_headers():
    return {"Authorization": ADMIN_TOKEN}
