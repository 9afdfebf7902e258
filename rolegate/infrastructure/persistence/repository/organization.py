"""SQLAlchemy repository implementations for departments and roles."""

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role
from rolegate.domain.organization.port.repository import DepartmentRepository, RoleRepository
from rolegate.domain.shared.error import ConflictError, NotFoundError
from rolegate.infrastructure.persistence.errors import translate_store_errors
from rolegate.infrastructure.persistence.tables import departments_table, roles_table


def _row_to_department(row: dict) -> Department:
    """Convert a database row to a Department model."""
    return Department(id=row["id"], name=row["name"])


def _role_select():
    """Roles joined with their department (outer join: a dangling id yields None)."""
    return select(
        roles_table,
        departments_table.c.name.label("department_name"),
    ).select_from(
        roles_table.outerjoin(departments_table, roles_table.c.department_id == departments_table.c.id)
    )


def _row_to_role(row: dict) -> Role:
    """Convert a joined role row to a Role model."""
    department = None
    if row.get("department_name") is not None:
        department = Department(id=row["department_id"], name=row["department_name"])
    return Role(
        id=row["id"],
        name=row["name"],
        level=row["level"],
        department_id=row["department_id"],
        department=department,
    )


class SQLAlchemyDepartmentRepository(DepartmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_store_errors
    async def list_all(self) -> list[Department]:
        stmt = select(departments_table).order_by(departments_table.c.name)
        result = await self.session.execute(stmt)
        return [_row_to_department(dict(row)) for row in result.mappings().all()]

    @translate_store_errors
    async def get(self, department_id: int) -> Department | None:
        stmt = select(departments_table).where(departments_table.c.id == department_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_department(dict(row)) if row else None

    @translate_store_errors
    async def get_by_name(self, name: str) -> Department | None:
        stmt = select(departments_table).where(departments_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_department(dict(row)) if row else None

    @translate_store_errors
    async def add(self, name: str) -> Department:
        stmt = insert(departments_table).values(name=name).returning(departments_table.c.id)
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Department '{name}' already exists", code="DUPLICATE_NAME") from e
        return Department(id=result.scalar_one(), name=name)

    @translate_store_errors
    async def rename(self, department_id: int, name: str) -> Department | None:
        stmt = update(departments_table).where(departments_table.c.id == department_id).values(name=name)
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Department '{name}' already exists", code="DUPLICATE_NAME") from e
        if result.rowcount == 0:
            return None
        return Department(id=department_id, name=name)

    @translate_store_errors
    async def delete(self, department_id: int) -> bool:
        stmt = delete(departments_table).where(departments_table.c.id == department_id)
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(
                "Cannot delete department with associated roles or users.",
                code="REFERENTIAL_CONFLICT",
            ) from e
        return result.rowcount > 0


class SQLAlchemyRoleRepository(RoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_store_errors
    async def list_all(self) -> list[Role]:
        stmt = _role_select().order_by(roles_table.c.name)
        result = await self.session.execute(stmt)
        return [_row_to_role(dict(row)) for row in result.mappings().all()]

    @translate_store_errors
    async def get(self, role_id: int) -> Role | None:
        stmt = _role_select().where(roles_table.c.id == role_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    @translate_store_errors
    async def get_by_name(self, name: str) -> Role | None:
        stmt = _role_select().where(roles_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    @translate_store_errors
    async def add(self, name: str, level: int, department_id: int) -> Role:
        stmt = (
            insert(roles_table)
            .values(name=name, level=level, department_id=department_id)
            .returning(roles_table.c.id)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Role '{name}' already exists", code="DUPLICATE_NAME") from e
        role_id = result.scalar_one()
        role = await self.get(role_id)
        if role is None:
            raise NotFoundError(f"Role {role_id} not found after insert", code="ROLE_NOT_FOUND")
        return role

    @translate_store_errors
    async def update(self, role: Role) -> None:
        stmt = (
            update(roles_table)
            .where(roles_table.c.id == role.id)
            .values(name=role.name, level=role.level, department_id=role.department_id)
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Role '{role.name}' already exists", code="DUPLICATE_NAME") from e

    @translate_store_errors
    async def delete(self, role_id: int) -> bool:
        stmt = delete(roles_table).where(roles_table.c.id == role_id)
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(
                "Cannot delete role that is assigned to users.",
                code="REFERENTIAL_CONFLICT",
            ) from e
        return result.rowcount > 0

    @translate_store_errors
    async def count_by_department(self, department_id: int) -> int:
        stmt = select(func.count()).select_from(roles_table).where(roles_table.c.department_id == department_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
