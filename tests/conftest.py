import os
import tempfile

# Settings are read at import time; point them at throwaway resources first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_ROOT", tempfile.mkdtemp(prefix="jobportal-test-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobportal.config import settings
from jobportal.core.identity import Identity
from jobportal.core.rate_limiter import rate_limiter
from jobportal.database import Base, get_db
from jobportal.dependencies import (
    get_current_identity,
    get_email_validator,
    get_mailer,
    require_employer,
    require_jobseeker,
)
from jobportal.main import app
from jobportal.models import Application, Job, User  # noqa: F401
from jobportal.core.errors import MailDeliveryError
from jobportal.services.email_domain import EmailDomainValidator


class FakeMailer:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def send(self, to_addr: str, subject: str, html: str) -> None:
        if self.fail:
            raise MailDeliveryError("smtp down")
        self.sent.append((to_addr, subject, html))


def fake_mx(domain: str):
    return [(10, f"mx.{domain}")]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def jobseeker_identity() -> Identity:
    return Identity(id="seeker-1", role="jobseeker", name="Sam Seeker")


@pytest.fixture
def employer_identity() -> Identity:
    return Identity(id="employer-1", role="employer", name="Erin Employer")


@pytest.fixture
def client(jobseeker_identity: Identity):
    def _db_override():
        yield object()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_identity] = lambda: jobseeker_identity
    app.dependency_overrides[require_jobseeker] = lambda: jobseeker_identity
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(employer_identity: Identity):
    def _db_override():
        yield object()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_identity] = lambda: employer_identity
    app.dependency_overrides[require_employer] = lambda: employer_identity
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def upload_root(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_root", str(tmp_path))
    return tmp_path


@pytest.fixture
def outbox() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def live_client(db_session, upload_root, outbox):
    """Real routers, repos and gates over in-memory SQLite; DNS and SMTP are faked."""

    def _db_override():
        yield db_session

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_email_validator] = lambda: EmailDomainValidator(resolver=fake_mx)
    app.dependency_overrides[get_mailer] = lambda: outbox
    yield TestClient(app)
    app.dependency_overrides.clear()
    rate_limiter.reset()


def signup(client: TestClient, *, name="Sam Seeker", email="sam@example.com", password="password123",
           role="jobseeker", company_name=None):
    body = {"name": name, "email": email, "password": password, "role": role}
    if company_name is not None:
        body["company_name"] = company_name
    return client.post("/auth/signup", json=body)


@pytest.fixture
def seeker_token(live_client) -> str:
    resp = signup(live_client)
    assert resp.status_code == 201
    return resp.json()["token"]


@pytest.fixture
def employer_token(live_client) -> str:
    resp = signup(live_client, name="Erin Employer", email="erin@acme.com", role="employer", company_name="ACME")
    assert resp.status_code == 201
    return resp.json()["token"]


@pytest.fixture
def posted_job(live_client, employer_token) -> dict:
    resp = live_client.post(
        "/jobs",
        json={"title": "Backend Engineer", "description": "Build APIs", "location": "Remote"},
        headers=auth_header(employer_token),
    )
    assert resp.status_code == 201
    return resp.json()
