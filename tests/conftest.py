import asyncio
import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the app's own engine away from the working directory.
_APP_DB_DIR = tempfile.mkdtemp(prefix="policy-service-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_APP_DB_DIR}/app.db"
os.environ["AI_TAILORING_ENABLED"] = "false"
os.environ["APP_ENV"] = "test"

from app.db import get_session
from app.main import app
from app.models import Base


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", future=True, poolclass=NullPool)

    async def _init_models():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_init_models())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
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


@pytest.fixture
def run_in_session(session_factory):
    """Run ``fn(session)`` (a coroutine function) against the test database."""

    def _run(fn):
        async def _inner():
            async with session_factory() as session:
                return await fn(session)

        return asyncio.run(_inner())

    return _run


@pytest.fixture
def seed(run_in_session):
    """Insert ORM rows and return their primary keys."""

    def _seed(*rows):
        async def _insert(session):
            session.add_all(rows)
            await session.commit()
            return [row.id for row in rows]

        ids = run_in_session(_insert)
        return ids[0] if len(ids) == 1 else ids

    return _seed
