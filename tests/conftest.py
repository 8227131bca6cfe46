"""
Shared fixtures: per-test settings, SQLite database and HTTP client.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api.app import create_app
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models

TEST_SECRET = "test-secret-0123456789abcdef"


class FakeClock:
    """Callable clock returning a settable UNIX timestamp."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'app.db'}",
        password_hash_rounds=10,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await init_models(engine)
    yield build_session_factory(engine)
    await engine.dispose()
