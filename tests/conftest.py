# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from fastmoney.config import Settings
from fastmoney.crud import create_user, set_role
from fastmoney.database import Base, build_engine, build_session_factory
from fastmoney.main import create_app
from fastmoney.models.user import ROLE_ADMIN
from tests.helpers import login, register


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


@pytest.fixture
def settings(tmp_path):
    """Settings apuntando a un SQLite temporal."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'fastmoney_test.db'}",
        secret_key="test-secret",
        access_token_expire_minutes=5,
        odds_push_interval=0.05,
    )


@pytest.fixture
def session_factory(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_token(client):
    assert register(client, "alice").status_code == 200
    return login(client, "alice").json()["token"]


@pytest.fixture
def admin_token(client, db):
    create_user(db, "boss", "admin-pw", "boss@x.com")
    set_role(db, "boss", ROLE_ADMIN)
    return login(client, "boss", "admin-pw").json()["token"]
