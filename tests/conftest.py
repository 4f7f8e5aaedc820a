import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ASSISTANT_BACKEND"] = "simulated"

import random

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resume_builder.api.deps import get_db, get_resume_assistant
from resume_builder.client.draft_store import DraftStore, MemoryStorage
from resume_builder.database import Base
from resume_builder.main import app
from resume_builder.services.llm.assistant import SimulatedAssistant

TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def test_app(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_resume_assistant] = lambda: SimulatedAssistant(random.Random(7))
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(test_app):
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture()
def asgi_transport(test_app):
    return httpx.ASGITransport(app=test_app)


@pytest.fixture()
def store():
    ticks = iter(range(1_000, 1_000_000))
    return DraftStore(MemoryStorage(), clock=lambda: next(ticks))


@pytest.fixture()
def sample_record():
    return {
        "firstName": "Ana",
        "lastName": "Silva",
        "email": "ana@example.com",
        "phone": "555-0100",
        "summary": "Backend engineer.",
        "experience": [
            {
                "id": "exp-1",
                "company": "Acme",
                "position": "Engineer",
                "startDate": "2020-01",
                "current": True,
            }
        ],
        "skills": ["Python", "SQL"],
        "templateStyle": "modern",
        "colorScheme": "green",
    }
