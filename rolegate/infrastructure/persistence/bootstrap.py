"""Schema bootstrap."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from rolegate.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database schema ensured (%d tables)", len(metadata.tables))

