"""Tests for reference data seeding."""

import pytest
from sqlalchemy import func, select

from rolegate.infrastructure.persistence.seed import DEPARTMENTS, ROLES, seed_reference_data
from rolegate.infrastructure.persistence.tables import departments_table, roles_table


class TestSeed:
    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, engine) -> None:
        # The fixture already seeded once
        assert await seed_reference_data(engine) == (0, 0)

        async with engine.connect() as conn:
            departments = (await conn.execute(select(func.count()).select_from(departments_table))).scalar_one()
            roles = (await conn.execute(select(func.count()).select_from(roles_table))).scalar_one()

        assert departments == len(DEPARTMENTS)
        assert roles == len(ROLES)

    @pytest.mark.asyncio
    async def test_ids_follow_seed_order(self, engine) -> None:
        async with engine.connect() as conn:
            rows = (await conn.execute(select(roles_table.c.id, roles_table.c.name).order_by(roles_table.c.id))).all()

        assert [name for _, name in rows] == [name for name, _, _ in ROLES]
