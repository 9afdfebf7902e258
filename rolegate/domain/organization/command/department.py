"""Department management commands (SUPER_ADMIN only)."""

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.organization.query.view import DepartmentView
from rolegate.domain.organization.service.organization import OrganizationService
from rolegate.domain.shared.authorization.policy import ADMIN_ONLY
from rolegate.domain.shared.command import Command, CommandHandler, Result


class CreateDepartment(Command):
    name: str | None = None


class DepartmentChanged(Result):
    department: DepartmentView


class CreateDepartmentHandler(CommandHandler[CreateDepartment, DepartmentChanged]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: CreateDepartment) -> DepartmentChanged:
        department = await self.organization_service.create_department(cmd.name)
        return DepartmentChanged(department=DepartmentView.from_entity(department))


class RenameDepartment(Command):
    department_id: int
    name: str | None = None


class RenameDepartmentHandler(CommandHandler[RenameDepartment, DepartmentChanged]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: RenameDepartment) -> DepartmentChanged:
        department = await self.organization_service.rename_department(cmd.department_id, cmd.name)
        return DepartmentChanged(department=DepartmentView.from_entity(department))


class DeleteDepartment(Command):
    department_id: int


class DepartmentDeleted(Result):
    department_id: int


class DeleteDepartmentHandler(CommandHandler[DeleteDepartment, DepartmentDeleted]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: DeleteDepartment) -> DepartmentDeleted:
        await self.organization_service.delete_department(cmd.department_id)
        return DepartmentDeleted(department_id=cmd.department_id)
