"""Pytest fixtures for unit tests."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hardware_catalog import schemas
from hardware_catalog.models import Base
from hardware_catalog.notifier import Notifier
from hardware_catalog.services import ReadService, WriteService


CATALOG = [
    dict(name="GeForce RTX 4090", type="GRAPHICS_CARD", manufacturer="NVIDIA", price="1599.99",
         rating=5, in_stock=True, tags=["gaming", "high-speed"]),
    dict(name="Ryzen 7 7800X3D", type="PROCESSOR", manufacturer="AMD", price="449.00",
         rating=5, in_stock=True, tags=["gaming"]),
    dict(name="Corsair Vengeance LPX 16GB", type="RAM", manufacturer="Corsair", price="119.99",
         rating=4, in_stock=True, tags=["DDR4", "reliable"]),
    dict(name="Samsung 990 Pro", type="SSD", manufacturer="Samsung", price="179.99",
         rating=4, in_stock=False, tags=["reliable", "high-speed"]),
    dict(name="WD Blue 2TB", type="HDD", manufacturer="Western Digital", price="54.99",
         rating=3, in_stock=True),
    dict(name="Noctua NH-D15", type="COOLER", manufacturer="Noctua", price="109.90",
         rating=5, in_stock=False, tags=["reliable"]),
    dict(name="Pure Base 500", type="CASE", manufacturer="be quiet!", price="89.00",
         rating=2, in_stock=True, tags=[]),
    dict(name="Seasonic Focus GX-750", type="POWER_SUPPLY", manufacturer="Seasonic", price="129.99",
         rating=4, in_stock=True, tags=["reliable"]),
    dict(name="ASUS ROG Strix B650", type="MOTHERBOARD", manufacturer="ASUS", price="249.99",
         rating=3, in_stock=False, tags=["gaming"]),
    dict(name="Arctic P12", type="FAN", manufacturer="Arctic", price="6.99",
         rating=1, in_stock=True),
]


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)


class FailingNotifier(Notifier):
    def send(self, notification):
        raise ConnectionError("mail server unreachable")


@pytest.fixture(scope="function")
def db():
    """Create an in-memory SQLite database for unit testing."""
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


@pytest.fixture
def failing_notifier():
    return FailingNotifier()


@pytest.fixture
def read_service(db):
    return ReadService(db)


@pytest.fixture
def write_service(db, read_service, notifier):
    return WriteService(db, read_service=read_service, notifier=notifier)


@pytest.fixture
def make_hardware():
    """Factory for create payloads; keyword arguments override the defaults."""
    def factory(**overrides):
        data = dict(CATALOG[0])
        data.update(overrides)
        return schemas.HardwareCreate(**data)
    return factory


@pytest.fixture
def catalog(write_service):
    """Ten records, one per hardware type; returns their ids in insert order."""
    return [write_service.create(schemas.HardwareCreate(**data)) for data in CATALOG]
