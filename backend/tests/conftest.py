import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.portfolio.config import settings
from backend.portfolio.db import get_db
from backend.portfolio.main import create_app
from backend.portfolio.models import Base
from backend.portfolio.services.auth_service import AuthService, hash_password
from backend.portfolio.services.settings_store import clear_settings_cache


ADMIN_PASSWORD = "stage-left"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    monkeypatch.setattr(settings, "REDIS_URL", None)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD, iterations=1000))
    monkeypatch.setattr(settings, "APP_SECRET", "test-secret")
    monkeypatch.setattr(settings, "EMAIL_HOST", None)
    monkeypatch.setattr(settings, "TELEGRAM_BOT_TOKEN", None)
    monkeypatch.setattr(settings, "TELEGRAM_CHAT_ID", None)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": AuthService().issue_token()}


@pytest.fixture
def admin_client(client):
    resp = client.post("/admin/login", data={"password": ADMIN_PASSWORD}, follow_redirects=False)
    assert resp.status_code == 303
    return client


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
