"""Read models for departments and roles."""

from pydantic import BaseModel

from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role


class DepartmentView(BaseModel):
    id: int
    name: str

    @classmethod
    def from_entity(cls, department: Department) -> "DepartmentView":
        return cls(id=department.id, name=department.name)


class RoleView(BaseModel):
    id: int
    name: str
    level: int
    level_label: str
    department_id: int
    department: DepartmentView | None = None

    @classmethod
    def from_entity(cls, role: Role) -> "RoleView":
        return cls(
            id=role.id,
            name=role.name,
            level=role.level,
            level_label=role.label,
            department_id=role.department_id,
            department=DepartmentView.from_entity(role.department) if role.department else None,
        )
