# tests/conftest.py
import os
import tempfile
import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from device_service.main import app
from device_service.db import Base, get_db
from device_service import settings as service_settings
from device_service.seed import reset_and_seed_data, reset_and_seed_stats_data
from contract import DeviceApi, RpcSeeder
from contract import settings as contract_settings


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seed_sample(db_session):
    """Baseline fixtures plus stats, loaded directly (no HTTP)."""
    reset_and_seed_data(db_session)
    reset_and_seed_stats_data(db_session)


# --- Contract suite wiring: live server if CONTRACT_BASE_URL is set, else in-process ---
LIVE = bool(contract_settings.BASE_URL)


@pytest.fixture
def http():
    if LIVE:
        with requests.Session() as s:
            yield s
    else:
        with TestClient(app) as c:
            yield c


@pytest.fixture
def base_url():
    return contract_settings.BASE_URL if LIVE else "http://testserver"


@pytest.fixture
def seeder(http, base_url):
    if LIVE:
        return RpcSeeder(http, contract_settings.RPC_URL, contract_settings.SERVICE_KEY)
    return RpcSeeder(http, base_url, service_settings.SERVICE_KEY)


@pytest.fixture
def device_api(http, base_url):
    return DeviceApi(http, base_url, contract_settings.API_KEY)
