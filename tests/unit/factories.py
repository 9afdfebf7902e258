"""Builders for domain objects used across unit tests."""

from datetime import UTC, datetime

from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role
from rolegate.domain.profile.model.profile import Profile, ProfileId

ENGINEERING = Department(id=1, name="Engineering")


def make_role(
    level: int = RoleLevel.ASSISTANT,
    role_id: int = 2,
    name: str = "Assistant Developer",
    department: Department = ENGINEERING,
) -> Role:
    return Role(id=role_id, name=name, level=int(level), department_id=department.id, department=department)


def make_profile(
    user_id: str = "user-1",
    name: str | None = "Ada",
    department_id: int | None = 1,
    role_id: int | None = 2,
    approved: bool = True,
    role: Role | None = None,
    level: int = RoleLevel.ASSISTANT,
) -> Profile:
    now = datetime.now(UTC)
    if role is None and role_id is not None:
        role = make_role(level=level, role_id=role_id)
    return Profile(
        id=ProfileId.generate(),
        user_id=user_id,
        name=name,
        department_id=department_id,
        role_id=role_id,
        approved=approved,
        created_at=now,
        updated_at=now,
        role=role,
        department=ENGINEERING if department_id is not None else None,
    )
