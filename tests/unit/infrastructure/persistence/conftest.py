"""Fixtures for repository tests against in-memory SQLite."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from rolegate.config import Config, DatabaseConfig
from rolegate.infrastructure.persistence.bootstrap import create_schema
from rolegate.infrastructure.persistence.database import create_db_engine, create_session_factory
from rolegate.infrastructure.persistence.seed import seed_reference_data


@pytest_asyncio.fixture
async def engine():
    """Per-test in-memory database with schema and reference data."""
    engine = create_db_engine(Config(database=DatabaseConfig(url="sqlite+aiosqlite://")))
    await create_schema(engine)
    await seed_reference_data(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine):
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()
