"""Pytest fixtures for integration tests."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hardware_catalog.models import Base
from hardware_catalog.main import app
from hardware_catalog.notifier import Notifier


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)


@pytest.fixture(scope="function")
def db():
    """Create an in-memory SQLite database for integration testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(db, notifier):
    """Create a test client with a test database session."""
    def override_get_db():
        yield db

    from hardware_catalog import database, notifier as notifier_module
    app.dependency_overrides[database.get_db] = override_get_db
    app.dependency_overrides[notifier_module.get_notifier] = lambda: notifier
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def hardware_json():
    return {
        "name": "GeForce RTX 4090",
        "type": "GRAPHICS_CARD",
        "manufacturer": "NVIDIA",
        "price": "1599.99",
        "rating": 5,
        "in_stock": True,
        "tags": ["gaming", "high-speed"],
    }
