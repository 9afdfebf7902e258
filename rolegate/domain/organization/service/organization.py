"""Organization service: department and role reference data management."""

import logging

from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role, validate_stored_level
from rolegate.domain.organization.port.repository import DepartmentRepository, RoleRepository
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.domain.shared.error import ConflictError, NotFoundError, ValidationError
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)

REFERENTIAL_CONFLICT = "REFERENTIAL_CONFLICT"
DUPLICATE_NAME = "DUPLICATE_NAME"


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Missing required field: name", field="name")
    return name.strip()


class OrganizationService(Service):
    """Manages departments and roles. Mutations are SUPER_ADMIN-only at the handler level."""

    _department_repo: DepartmentRepository
    _role_repo: RoleRepository
    _profile_repo: ProfileRepository

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    async def list_departments(self) -> list[Department]:
        return await self._department_repo.list_all()

    async def get_department(self, department_id: int) -> Department:
        department = await self._department_repo.get(department_id)
        if department is None:
            raise NotFoundError(f"Department {department_id} not found", code="DEPARTMENT_NOT_FOUND")
        return department

    async def create_department(self, name: str | None) -> Department:
        clean = _clean_name(name)
        if await self._department_repo.get_by_name(clean) is not None:
            raise ConflictError(f"Department '{clean}' already exists", code=DUPLICATE_NAME)
        department = await self._department_repo.add(clean)
        logger.info("Department created: id=%d, name=%s", department.id, department.name)
        return department

    async def rename_department(self, department_id: int, name: str | None) -> Department:
        clean = _clean_name(name)
        existing = await self._department_repo.get_by_name(clean)
        if existing is not None and existing.id != department_id:
            raise ConflictError(f"Department '{clean}' already exists", code=DUPLICATE_NAME)
        department = await self._department_repo.rename(department_id, clean)
        if department is None:
            raise NotFoundError(f"Department {department_id} not found", code="DEPARTMENT_NOT_FOUND")
        logger.info("Department renamed: id=%d, name=%s", department.id, department.name)
        return department

    async def delete_department(self, department_id: int) -> None:
        """Delete a department that no role or profile references."""
        await self.get_department(department_id)

        roles = await self._role_repo.count_by_department(department_id)
        profiles = await self._profile_repo.count_by_department(department_id)
        if roles or profiles:
            logger.warning(
                "Refusing to delete department %d: roles=%d, profiles=%d",
                department_id,
                roles,
                profiles,
            )
            raise ConflictError(
                "Cannot delete department with associated roles or users.",
                code=REFERENTIAL_CONFLICT,
            )

        if not await self._department_repo.delete(department_id):
            raise NotFoundError(f"Department {department_id} not found", code="DEPARTMENT_NOT_FOUND")
        logger.info("Department deleted: id=%d", department_id)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def list_roles(self) -> list[Role]:
        return await self._role_repo.list_all()

    async def get_role(self, role_id: int) -> Role:
        role = await self._role_repo.get(role_id)
        if role is None:
            raise NotFoundError(f"Role {role_id} not found", code="ROLE_NOT_FOUND")
        return role

    async def create_role(self, name: str | None, level: int | None, department_id: int | None) -> Role:
        clean = _clean_name(name)
        if level is None:
            raise ValidationError("Missing required field: level", field="level")
        if department_id is None:
            raise ValidationError("Missing required field: departmentId", field="departmentId")
        validate_stored_level(level)
        await self.get_department(department_id)

        if await self._role_repo.get_by_name(clean) is not None:
            raise ConflictError(f"Role '{clean}' already exists", code=DUPLICATE_NAME)

        role = await self._role_repo.add(clean, level, department_id)
        logger.info(
            "Role created: id=%d, name=%s, level=%d (%s), department_id=%d",
            role.id,
            role.name,
            role.level,
            role.label,
            role.department_id,
        )
        return role

    async def update_role(
        self,
        role_id: int,
        *,
        name: str | None = None,
        level: int | None = None,
        department_id: int | None = None,
    ) -> Role:
        if name is None and level is None and department_id is None:
            raise ValidationError("No fields provided for update")

        role = await self.get_role(role_id)

        if name is not None:
            clean = _clean_name(name)
            existing = await self._role_repo.get_by_name(clean)
            if existing is not None and existing.id != role_id:
                raise ConflictError(f"Role '{clean}' already exists", code=DUPLICATE_NAME)
            role.name = clean
        if level is not None:
            role.level = validate_stored_level(level)
        if department_id is not None:
            role.department = await self.get_department(department_id)
            role.department_id = department_id

        await self._role_repo.update(role)
        logger.info("Role updated: id=%d, name=%s, level=%d", role.id, role.name, role.level)
        return await self.get_role(role_id)

    async def delete_role(self, role_id: int) -> None:
        """Delete a role that no profile is assigned to."""
        await self.get_role(role_id)

        assigned = await self._profile_repo.count_by_role(role_id)
        if assigned:
            logger.warning("Refusing to delete role %d: assigned to %d profile(s)", role_id, assigned)
            raise ConflictError(
                "Cannot delete role that is assigned to users.",
                code=REFERENTIAL_CONFLICT,
            )

        if not await self._role_repo.delete(role_id):
            raise NotFoundError(f"Role {role_id} not found", code="ROLE_NOT_FOUND")
        logger.info("Role deleted: id=%d", role_id)
