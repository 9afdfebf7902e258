"""Public reads of departments and roles."""

from rolegate.domain.organization.query.view import DepartmentView, RoleView
from rolegate.domain.organization.service.organization import OrganizationService
from rolegate.domain.shared.authorization.policy import public
from rolegate.domain.shared.query import Query, QueryHandler, Result


class ListDepartments(Query):
    pass


class DepartmentList(Result):
    departments: list[DepartmentView]


class ListDepartmentsHandler(QueryHandler[ListDepartments, DepartmentList]):
    __auth__ = public()
    organization_service: OrganizationService

    async def run(self, cmd: ListDepartments) -> DepartmentList:
        departments = await self.organization_service.list_departments()
        return DepartmentList(departments=[DepartmentView.from_entity(d) for d in departments])


class GetDepartment(Query):
    department_id: int


class DepartmentResult(Result):
    department: DepartmentView


class GetDepartmentHandler(QueryHandler[GetDepartment, DepartmentResult]):
    __auth__ = public()
    organization_service: OrganizationService

    async def run(self, cmd: GetDepartment) -> DepartmentResult:
        department = await self.organization_service.get_department(cmd.department_id)
        return DepartmentResult(department=DepartmentView.from_entity(department))


class ListRoles(Query):
    pass


class RoleList(Result):
    roles: list[RoleView]


class ListRolesHandler(QueryHandler[ListRoles, RoleList]):
    __auth__ = public()
    organization_service: OrganizationService

    async def run(self, cmd: ListRoles) -> RoleList:
        roles = await self.organization_service.list_roles()
        return RoleList(roles=[RoleView.from_entity(r) for r in roles])


class GetRole(Query):
    role_id: int


class RoleResult(Result):
    role: RoleView


class GetRoleHandler(QueryHandler[GetRole, RoleResult]):
    __auth__ = public()
    organization_service: OrganizationService

    async def run(self, cmd: GetRole) -> RoleResult:
        role = await self.organization_service.get_role(cmd.role_id)
        return RoleResult(role=RoleView.from_entity(role))
