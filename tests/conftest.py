# /tests/conftest.py

import os

# Point the module-level engine at an in-memory database before the app is
# imported, so nothing in the test run touches ./artworks.db.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.errors import GenerationError
from app.db import base
from app.db.database import build_engine, get_db
from app.main import create_app
from app.services.database_service import DatabaseService


class FakeGenerationClient:
    """
    Stands in for OpenRouterClient. Returns `svg` for every call, or raises
    `error` when one is set, and records the arguments it was called with.
    """

    def __init__(self, svg="<svg xmlns=\"http://www.w3.org/2000/svg\"><circle r=\"4\"/></svg>", error=None):
        self.svg = svg
        self.error = error
        self.calls = []

    async def generate_svg(self, prompt_text, model, temperature, max_tokens, reasoning=None):
        self.calls.append({
            "prompt": prompt_text,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "reasoning": reasoning,
        })
        if self.error is not None:
            raise self.error
        return self.svg


@pytest.fixture
def engine():
    """A fresh, empty in-memory database for each test."""
    test_engine = build_engine("sqlite://")
    base.Base.metadata.create_all(bind=test_engine)
    yield test_engine
    base.Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(db_session=session)


@pytest.fixture
def settings():
    return Settings(openrouter_api_key="test-key", editing_enabled=True)


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def failing_client():
    return FakeGenerationClient(error=GenerationError("Chat-completion API returned status 502: upstream"))


def build_test_client(engine, settings, generation_client):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app = create_app(settings)
    app.dependency_overrides[get_db] = override_get_db
    app.state.generation_client = generation_client
    return TestClient(app)


@pytest.fixture
def client(engine, settings, fake_client):
    return build_test_client(engine, settings, fake_client)


@pytest.fixture
def read_only_client(engine, fake_client):
    return build_test_client(engine, Settings(openrouter_api_key="test-key", editing_enabled=False), fake_client)


@pytest.fixture
def make_client(engine, fake_client):
    """Builds a client for custom settings; the generation client defaults to `fake_client`."""
    def _make(settings, generation_client=None):
        return build_test_client(engine, settings, generation_client or fake_client)
    return _make
