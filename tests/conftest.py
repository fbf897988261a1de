"""
Shared fixtures: a fresh in-memory SQLite database per test, the services
bound to it, and an API client whose ``get_db`` dependency points at it.
"""
import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from iot_monitor.database import Base, get_db, make_engine
from iot_monitor.main import create_app
from iot_monitor.services.users import UserService
from iot_monitor.services.zones import ZoneService
from iot_monitor.services.devices import DeviceService
from iot_monitor.services.sensors import SensorService
from iot_monitor.services.readings import ReadingService

logging.getLogger("iot_monitor").setLevel(logging.WARNING)


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def users(db):
    return UserService(db)


@pytest.fixture()
def zones(db):
    return ZoneService(db)


@pytest.fixture()
def devices(db):
    return DeviceService(db)


@pytest.fixture()
def sensors(db):
    return SensorService(db)


@pytest.fixture()
def readings(db):
    return ReadingService(db)


@pytest.fixture()
def client(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------

@pytest.fixture()
def zone(zones):
    return zones.create({"name": "Zona Centro"})


@pytest.fixture()
def owner(users):
    return users.create({"name": "Juan", "email": "j@x.com", "password": "secret1"})


@pytest.fixture()
def device(devices, owner, zone):
    return devices.create({
        "serialNumber": "SN-1",
        "model": "ESP32",
        "ownerId": owner.id_user,
        "zoneId": zone.id_zone,
        "installedAt": "2024-01-15T10:00:00Z",
        "status": "active",
    })


@pytest.fixture()
def sensor(sensors, device):
    return sensors.create({
        "type": "temperature",
        "unit": "°C",
        "model": "DHT22",
        "deviceId": device.id_device,
        "location": "21.15,-101.71",
    })
