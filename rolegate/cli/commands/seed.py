"""Seed reference data into the configured database."""

import asyncio

from rolegate.cli.console import get_console
from rolegate.config import Config, configure_logging
from rolegate.infrastructure.persistence.bootstrap import create_schema
from rolegate.infrastructure.persistence.database import create_db_engine
from rolegate.infrastructure.persistence.seed import seed_reference_data


async def _seed(config: Config) -> tuple[int, int]:
    engine = create_db_engine(config)
    try:
        await create_schema(engine)
        return await seed_reference_data(engine)
    finally:
        await engine.dispose()


def seed() -> None:
    """Create missing tables and insert the standard departments and roles.

    Safe to run repeatedly: existing rows are left untouched.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    with console.status("Seeding reference data..."):
        departments, roles = asyncio.run(_seed(config))

    console.success(f"Seeded {departments} department(s) and {roles} role(s)")
    if not departments and not roles:
        console.info("Reference data was already present")
