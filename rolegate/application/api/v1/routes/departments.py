"""Department routes. Reads are public, mutations require SUPER_ADMIN."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from rolegate.application.api.v1.schemas import (
    DeletedResponse,
    DepartmentRequest,
    DepartmentResponse,
)
from rolegate.domain.organization.command.department import (
    CreateDepartment,
    CreateDepartmentHandler,
    DeleteDepartment,
    DeleteDepartmentHandler,
    RenameDepartment,
    RenameDepartmentHandler,
)
from rolegate.domain.organization.query.reference import (
    GetDepartment,
    GetDepartmentHandler,
    ListDepartments,
    ListDepartmentsHandler,
)

router = APIRouter(prefix="/departments", tags=["Departments"], route_class=DishkaRoute)


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    handler: FromDishka[ListDepartmentsHandler],
) -> list[DepartmentResponse]:
    result = await handler.run(ListDepartments())
    return [DepartmentResponse.model_validate(d) for d in result.departments]


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    handler: FromDishka[GetDepartmentHandler],
) -> DepartmentResponse:
    result = await handler.run(GetDepartment(department_id=department_id))
    return DepartmentResponse.model_validate(result.department)


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    body: DepartmentRequest,
    handler: FromDishka[CreateDepartmentHandler],
) -> DepartmentResponse:
    result = await handler.run(CreateDepartment(name=body.name))
    return DepartmentResponse.model_validate(result.department)


@router.patch("/{department_id}", response_model=DepartmentResponse)
async def rename_department(
    department_id: int,
    body: DepartmentRequest,
    handler: FromDishka[RenameDepartmentHandler],
) -> DepartmentResponse:
    result = await handler.run(RenameDepartment(department_id=department_id, name=body.name))
    return DepartmentResponse.model_validate(result.department)


@router.delete("/{department_id}", response_model=DeletedResponse)
async def delete_department(
    department_id: int,
    handler: FromDishka[DeleteDepartmentHandler],
) -> DeletedResponse:
    """Delete a department. Refused while roles or profiles reference it."""
    result = await handler.run(DeleteDepartment(department_id=department_id))
    return DeletedResponse(id=result.department_id, message="Department deleted")
