# backend/tests/conftest.py
import os
import shutil
import tempfile

# Point the app at throwaway storage before anything reads the settings
_TMP = tempfile.mkdtemp(prefix="industrialco-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["CONTENT_DIR"] = os.path.join(_TMP, "content")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["MAIL_API_URL"] = ""
os.environ["MAIL_FAILURE_RATE"] = "0"
os.environ["CATALOG_SAMPLE_FALLBACK"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from config import settings
from database import Base, engine, SessionLocal, init_db, make_engine, get_db
from main import app
from models.users import User
from utils.hashing import get_password_hash
from utils.mailer import DeliveryResult, get_mailer


@pytest.fixture(autouse=True)
def fresh_state():
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    for directory in (settings.CONTENT_DIR, settings.UPLOAD_DIR):
        shutil.rmtree(directory, ignore_errors=True)
        os.makedirs(directory, exist_ok=True)
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email="user@example.com", password="secret-pass", role="user", first_name="Test",
              last_name="User", company=None, is_active=True):
        user = User(
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            first_name=first_name,
            last_name=last_name,
            company=company,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def login(client):
    def _login(email, password):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]
    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(make_user, login):
    user = make_user(email="admin@example.com", password="admin-pass", role="admin", first_name="Ada", last_name="Admin")
    return user, bearer(login("admin@example.com", "admin-pass"))


@pytest.fixture
def admin_headers(admin):
    return admin[1]


@pytest.fixture
def user_headers(make_user, login):
    make_user(email="bob@example.com", password="bob-pass", first_name="Bob", last_name="Builder")
    return bearer(login("bob@example.com", "bob-pass"))


class StubMailer:
    """Records every message; addresses in `failing` fail delivery."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []

    async def send(self, to, subject, body):
        self.sent.append({"to": to, "subject": subject, "body": body})
        if to in self.failing:
            return DeliveryResult(success=False, error="SMTP connection failed")
        return DeliveryResult(success=True)


@pytest.fixture
def mailer():
    stub = StubMailer()
    app.dependency_overrides[get_mailer] = lambda: stub
    return stub


@pytest.fixture
def broken_db():
    """Route every request to a database that cannot be opened."""
    bad_engine = make_engine(f"sqlite:///{os.path.join(_TMP, 'missing-dir', 'nested', 'db.sqlite')}")
    BadSession = sessionmaker(autocommit=False, autoflush=False, bind=bad_engine)

    def _get_db():
        session = BadSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield BadSession
    bad_engine.dispose()


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_TMP, ignore_errors=True)
