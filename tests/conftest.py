import asyncio
import os
import sys
from pathlib import Path

os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-supabase-jwt-secret-at-least-32-bytes")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ELEVEN_LABS_API_KEY", "test-eleven-labs-key")
os.environ.setdefault("APP_ENV", "test")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from foresight.db import get_session
from foresight.main import app
from foresight.models import Base
from foresight.services.gemini_client import GenerationFailure


class FakeGenerator:
    """Stands in for GenerationClient: returns canned text or raises."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, *, tools=None):
        self.calls.append({"prompt": prompt, "tools": tools})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def make_generator():
    def _make(text="", error=None):
        return FakeGenerator(text=text, error=error)

    return _make


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=GenerationFailure("Gemini server error (503): overloaded", status_code=503))


@pytest.fixture(scope="session")
def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)

    async def _init_models():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_init_models())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture(scope="session")
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture(autouse=True)
def override_session(session_factory):
    async def _override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def make_token(sub="user-123", secret=None, audience="authenticated"):
    secret = secret or os.environ["SUPABASE_JWT_SECRET"]
    return jwt.encode({"sub": sub, "aud": audience}, secret, algorithm="HS256")


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
