import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from api.deps import get_delete_delay, get_failure_strategy, get_session
from db import Base
from main import app
from schema_bootstrap import apply_schema_bootstrap
from services.chaos import FailureStrategy, NeverFail


class ChaosSwitch:
    """Lets a test flip the delete failure strategy mid-test."""

    def __init__(self, strategy: FailureStrategy):
        self.strategy = strategy


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}", poolclass=NullPool)

    async def _init() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await apply_schema_bootstrap(engine)

    asyncio.run(_init())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def sessions(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def chaos():
    return ChaosSwitch(NeverFail())


@pytest.fixture
def api_app(sessions, chaos):
    async def _session_override():
        async with sessions() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_failure_strategy] = lambda: chaos.strategy
    app.dependency_overrides[get_delete_delay] = lambda: 0.0
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    return TestClient(api_app)
