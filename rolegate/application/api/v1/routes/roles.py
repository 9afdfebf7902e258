"""Role routes. Reads are public, mutations require SUPER_ADMIN."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from rolegate.application.api.v1.schemas import (
    CreateRoleRequest,
    DeletedResponse,
    RoleResponse,
    UpdateRoleRequest,
)
from rolegate.domain.organization.command.role import (
    CreateRole,
    CreateRoleHandler,
    DeleteRole,
    DeleteRoleHandler,
    UpdateRole,
    UpdateRoleHandler,
)
from rolegate.domain.organization.query.reference import (
    GetRole,
    GetRoleHandler,
    ListRoles,
    ListRolesHandler,
)

router = APIRouter(prefix="/roles", tags=["Roles"], route_class=DishkaRoute)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    handler: FromDishka[ListRolesHandler],
) -> list[RoleResponse]:
    """List roles with their department."""
    result = await handler.run(ListRoles())
    return [RoleResponse.model_validate(r) for r in result.roles]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    handler: FromDishka[GetRoleHandler],
) -> RoleResponse:
    result = await handler.run(GetRole(role_id=role_id))
    return RoleResponse.model_validate(result.role)


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    body: CreateRoleRequest,
    handler: FromDishka[CreateRoleHandler],
) -> RoleResponse:
    result = await handler.run(
        CreateRole(name=body.name, level=body.level, department_id=body.department_id)
    )
    return RoleResponse.model_validate(result.role)


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    body: UpdateRoleRequest,
    handler: FromDishka[UpdateRoleHandler],
) -> RoleResponse:
    result = await handler.run(
        UpdateRole(
            role_id=role_id,
            name=body.name,
            level=body.level,
            department_id=body.department_id,
        )
    )
    return RoleResponse.model_validate(result.role)


@router.delete("/{role_id}", response_model=DeletedResponse)
async def delete_role(
    role_id: int,
    handler: FromDishka[DeleteRoleHandler],
) -> DeletedResponse:
    """Delete a role. Refused while profiles are assigned to it."""
    result = await handler.run(DeleteRole(role_id=role_id))
    return DeletedResponse(id=result.role_id, message="Role deleted")
