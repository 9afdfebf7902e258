"""Role management commands (SUPER_ADMIN only)."""

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.organization.query.view import RoleView
from rolegate.domain.organization.service.organization import OrganizationService
from rolegate.domain.shared.authorization.policy import ADMIN_ONLY
from rolegate.domain.shared.command import Command, CommandHandler, Result


class CreateRole(Command):
    name: str | None = None
    level: int | None = None
    department_id: int | None = None


class RoleChanged(Result):
    role: RoleView


class CreateRoleHandler(CommandHandler[CreateRole, RoleChanged]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: CreateRole) -> RoleChanged:
        role = await self.organization_service.create_role(cmd.name, cmd.level, cmd.department_id)
        return RoleChanged(role=RoleView.from_entity(role))


class UpdateRole(Command):
    role_id: int
    name: str | None = None
    level: int | None = None
    department_id: int | None = None


class UpdateRoleHandler(CommandHandler[UpdateRole, RoleChanged]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: UpdateRole) -> RoleChanged:
        role = await self.organization_service.update_role(
            cmd.role_id,
            name=cmd.name,
            level=cmd.level,
            department_id=cmd.department_id,
        )
        return RoleChanged(role=RoleView.from_entity(role))


class DeleteRole(Command):
    role_id: int


class RoleDeleted(Result):
    role_id: int


class DeleteRoleHandler(CommandHandler[DeleteRole, RoleDeleted]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    organization_service: OrganizationService

    async def run(self, cmd: DeleteRole) -> RoleDeleted:
        await self.organization_service.delete_role(cmd.role_id)
        return RoleDeleted(role_id=cmd.role_id)
