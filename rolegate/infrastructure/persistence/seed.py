"""Reference data seed: the standard departments and roles. Idempotent."""

import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.infrastructure.persistence.tables import departments_table, roles_table

logger = logging.getLogger(__name__)

DEPARTMENTS: tuple[str, ...] = (
    "Engineering",
    "Human Resources",
    "Operations",
    "Administration",
)

# (role name, level, department name)
ROLES: tuple[tuple[str, RoleLevel, str], ...] = (
    ("Open User", RoleLevel.OPEN, "Administration"),
    ("Assistant Developer", RoleLevel.ASSISTANT, "Engineering"),
    ("Professional Developer", RoleLevel.PROFESSIONAL, "Engineering"),
    ("Senior Engineer", RoleLevel.SENIOR, "Engineering"),
    ("Engineering Manager", RoleLevel.MANAGER, "Engineering"),
    ("HR Executive", RoleLevel.EXECUTIVE, "Human Resources"),
    ("Operations Manager", RoleLevel.MANAGER, "Operations"),
    ("Super Admin", RoleLevel.SUPER_ADMIN, "Administration"),
)


async def _ensure_department(conn: AsyncConnection, name: str) -> tuple[int, bool]:
    existing = await conn.execute(select(departments_table.c.id).where(departments_table.c.name == name))
    department_id = existing.scalar_one_or_none()
    if department_id is not None:
        return department_id, False
    result = await conn.execute(insert(departments_table).values(name=name).returning(departments_table.c.id))
    return result.scalar_one(), True


async def seed_reference_data(engine: AsyncEngine) -> tuple[int, int]:
    """Insert missing departments and roles. Existing rows are never modified.

    Returns:
        (departments created, roles created)
    """
    departments_created = 0
    roles_created = 0

    async with engine.begin() as conn:
        department_ids: dict[str, int] = {}
        for name in DEPARTMENTS:
            department_ids[name], created = await _ensure_department(conn, name)
            departments_created += created

        for name, level, department in ROLES:
            existing = await conn.execute(select(roles_table.c.id).where(roles_table.c.name == name))
            if existing.scalar_one_or_none() is not None:
                continue
            await conn.execute(
                insert(roles_table).values(
                    name=name,
                    level=int(level),
                    department_id=department_ids[department],
                )
            )
            roles_created += 1

    logger.info(
        "Reference data seeded: departments_created=%d, roles_created=%d",
        departments_created,
        roles_created,
    )
    return departments_created, roles_created
