"""SQLAlchemy repository implementation for profiles."""

from uuid import UUID

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role
from rolegate.domain.profile.model.profile import Profile, ProfileId
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.domain.shared.error import ConflictError
from rolegate.infrastructure.persistence.errors import translate_store_errors
from rolegate.infrastructure.persistence.tables import (
    departments_table,
    profiles_table,
    roles_table,
)

_role_department = departments_table.alias("role_department")
_profile_department = departments_table.alias("profile_department")


def _profile_select():
    """Profiles with their role (and the role's department) and their own department."""
    return select(
        profiles_table,
        roles_table.c.name.label("role_name"),
        roles_table.c.level.label("role_level"),
        roles_table.c.department_id.label("role_department_id"),
        _role_department.c.name.label("role_department_name"),
        _profile_department.c.name.label("department_name"),
    ).select_from(
        profiles_table.outerjoin(roles_table, profiles_table.c.role_id == roles_table.c.id)
        .outerjoin(_role_department, roles_table.c.department_id == _role_department.c.id)
        .outerjoin(_profile_department, profiles_table.c.department_id == _profile_department.c.id)
    )


def _row_to_profile(row: dict) -> Profile:
    """Convert a joined profile row to a Profile model."""
    role = None
    if row.get("role_name") is not None:
        role_department = None
        if row.get("role_department_name") is not None:
            role_department = Department(id=row["role_department_id"], name=row["role_department_name"])
        role = Role(
            id=row["role_id"],
            name=row["role_name"],
            level=row["role_level"],
            department_id=row["role_department_id"],
            department=role_department,
        )

    department = None
    if row.get("department_name") is not None:
        department = Department(id=row["department_id"], name=row["department_name"])

    return Profile(
        id=ProfileId(UUID(row["id"])),
        user_id=row["user_id"],
        name=row["name"],
        department_id=row["department_id"],
        role_id=row["role_id"],
        approved=bool(row["approved"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        role=role,
        department=department,
    )


def _profile_to_dict(profile: Profile) -> dict:
    """Convert a Profile model to a database row dict."""
    return {
        "id": str(profile.id),
        "user_id": profile.user_id,
        "name": profile.name,
        "department_id": profile.department_id,
        "role_id": profile.role_id,
        "approved": profile.approved,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


class SQLAlchemyProfileRepository(ProfileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_store_errors
    async def get_by_user_id(self, user_id: str) -> Profile | None:
        stmt = _profile_select().where(profiles_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_profile(dict(row)) if row else None

    @translate_store_errors
    async def list_all(self) -> list[Profile]:
        stmt = _profile_select().order_by(profiles_table.c.created_at)
        result = await self.session.execute(stmt)
        return [_row_to_profile(dict(row)) for row in result.mappings().all()]

    @translate_store_errors
    async def add(self, profile: Profile) -> None:
        stmt = insert(profiles_table).values(**_profile_to_dict(profile))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(
                "Profile already exists for this user",
                code="PROFILE_ALREADY_EXISTS",
            ) from e

    @translate_store_errors
    async def update(self, profile: Profile) -> None:
        values = _profile_to_dict(profile)
        del values["id"], values["user_id"], values["created_at"]
        stmt = update(profiles_table).where(profiles_table.c.user_id == profile.user_id).values(**values)
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Profile references a missing department or role") from e

    @translate_store_errors
    async def count_by_role(self, role_id: int) -> int:
        stmt = select(func.count()).select_from(profiles_table).where(profiles_table.c.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    @translate_store_errors
    async def count_by_department(self, department_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(profiles_table)
            .where(profiles_table.c.department_id == department_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
