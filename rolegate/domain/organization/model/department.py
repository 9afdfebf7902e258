"""Department: grouping entity for roles and profiles."""

from pydantic import field_validator

from rolegate.domain.shared.model.entity import Entity


class Department(Entity):
    id: int
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Department name must not be blank")
        return v
