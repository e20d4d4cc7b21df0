"""Pytest configuration and fixtures."""

import asyncio
import os

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Set test environment variables before importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_hiretrack.db"
os.environ["ADMIN_EMAILS"] = "Chief@Example.com"
os.environ["COOKIE_SECURE"] = "false"
os.environ["BLOB_BACKEND"] = "local"
os.environ["STRICT_STATUS_TRANSITIONS"] = "false"


class FakeRedis:
    """In-memory replacement for the session store's Redis connection."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def get(self, key):
        return self.data.get(key)

    async def delete(self, key):
        self.ttls.pop(key, None)
        return int(self.data.pop(key, None) is not None)

    async def close(self):
        pass


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Route every session store call to an in-memory double."""
    from hiretrack.core import redis_client

    fake = FakeRedis()
    monkeypatch.setattr(redis_client, "_redis_client", fake)
    return fake


@pytest_asyncio.fixture
async def db():
    """Fresh tables for each test."""
    from hiretrack.core.storage import drop_models, init_models

    await drop_models()
    await init_models()
    yield


@pytest.fixture
def blob_dir(tmp_path):
    return tmp_path / "blobs"


@pytest.fixture
def client(blob_dir):
    """Test client over empty tables and a temporary blob directory."""
    from hiretrack.core.storage import drop_models
    from hiretrack.main import app
    from hiretrack.services.blob_store import LocalBlobStore
    from hiretrack.services.dependencies import blob_store_dep

    asyncio.run(drop_models())
    app.dependency_overrides[blob_store_dep] = lambda: LocalBlobStore(
        blob_dir, "http://testserver"
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def sign_up(client, email, flow, password="secret123", **profile):
    """Register through the API and return bearer headers for the new session."""
    response = client.post(
        "/auth/signup",
        json={"email": email, "password": password, "flow": flow, **profile},
    )
    assert response.status_code == 201, response.text
    # Keep requests explicit about who is calling.
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def hr_headers(client):
    return sign_up(client, "hr@example.com", "hr", displayName="Harriet HR")


@pytest.fixture
def applicant_headers(client):
    return sign_up(
        client, "ada@example.com", "applicant", firstName="Ada", lastName="Lovelace"
    )


@pytest.fixture
def applicant_payload():
    """Public application form payload as the frontend sends it."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "555-0100",
        "experience": "5 years of backend work",
        "education": "BSc Mathematics",
        "skills": "Python, SQL, FastAPI",
        "salary": "120k",
        "coverLetter": "I would love to join.",
        "position": "Backend Engineer",
        "documents": {
            "resume": {"name": "cv.pdf", "size": 2048, "mimeType": "application/pdf"}
        },
    }


@pytest.fixture
def job_payload():
    return {
        "title": "Backend Engineer",
        "department": "Engineering",
        "location": "Remote",
        "type": "full-time",
        "description": "Build and run the hiring APIs.",
        "requirements": ["Python", "SQL"],
        "benefits": ["Remote work"],
        "salaryRange": "$100k - $130k",
    }


@pytest.fixture
def applicant_input(applicant_payload):
    from hiretrack.schemas.application import ApplicantInput

    return ApplicantInput.model_validate(applicant_payload)


@pytest.fixture
def job_input(job_payload):
    from hiretrack.schemas.job import JobInput

    return JobInput.model_validate(job_payload)


@pytest.fixture
def register(client):
    """Sign up another principal: ``register(email, flow, **profile) -> headers``."""

    def _register(email, flow, **profile):
        return sign_up(client, email, flow, **profile)

    return _register
