"""DI provider for organization domain."""

from dishka import provide

from rolegate.domain.organization.command.department import (
    CreateDepartmentHandler,
    DeleteDepartmentHandler,
    RenameDepartmentHandler,
)
from rolegate.domain.organization.command.role import (
    CreateRoleHandler,
    DeleteRoleHandler,
    UpdateRoleHandler,
)
from rolegate.domain.organization.query.reference import (
    GetDepartmentHandler,
    GetRoleHandler,
    ListDepartmentsHandler,
    ListRolesHandler,
)
from rolegate.domain.organization.service.organization import OrganizationService
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope


class OrganizationProvider(Provider):
    # Services
    organization_service = provide(OrganizationService, scope=Scope.UOW)

    # Command Handlers
    create_department_handler = provide(CreateDepartmentHandler, scope=Scope.UOW)
    rename_department_handler = provide(RenameDepartmentHandler, scope=Scope.UOW)
    delete_department_handler = provide(DeleteDepartmentHandler, scope=Scope.UOW)
    create_role_handler = provide(CreateRoleHandler, scope=Scope.UOW)
    update_role_handler = provide(UpdateRoleHandler, scope=Scope.UOW)
    delete_role_handler = provide(DeleteRoleHandler, scope=Scope.UOW)

    # Query Handlers
    list_departments_handler = provide(ListDepartmentsHandler, scope=Scope.UOW)
    get_department_handler = provide(GetDepartmentHandler, scope=Scope.UOW)
    list_roles_handler = provide(ListRolesHandler, scope=Scope.UOW)
    get_role_handler = provide(GetRoleHandler, scope=Scope.UOW)
