"""HTTP request and response bodies.

The wire format is camelCase; request bodies also accept snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.profile.model.status import ProfileState


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Reference data
# =============================================================================


class DepartmentResponse(CamelModel):
    id: int
    name: str


class RoleResponse(CamelModel):
    id: int
    name: str
    level: int
    level_label: str
    department_id: int
    department: DepartmentResponse | None = None


class DepartmentRequest(CamelModel):
    name: str | None = None


class CreateRoleRequest(CamelModel):
    name: str | None = None
    level: int | None = None
    department_id: int | None = None


class UpdateRoleRequest(CamelModel):
    name: str | None = None
    level: int | None = None
    department_id: int | None = None


class DeletedResponse(CamelModel):
    id: int
    message: str


# =============================================================================
# Profiles
# =============================================================================


class ProfileResponse(CamelModel):
    id: str
    user_id: str
    name: str | None
    department_id: int | None
    role_id: int | None
    approved: bool
    state: ProfileState
    created_at: datetime
    updated_at: datetime
    role: RoleResponse | None = None
    department: DepartmentResponse | None = None


class CreateProfileRequest(CamelModel):
    name: str | None = None
    department_id: int | None = None
    role_id: int | None = None


class UpdateProfileRequest(CamelModel):
    """Only the fields present in the body are applied."""

    name: str | None = None
    department_id: int | None = None
    role_id: int | None = None


class ReviewProfileRequest(CamelModel):
    name: str | None = None
    department_id: int | None = None
    role_id: int | None = None
    approved: bool | None = None


class ProfileListResponse(CamelModel):
    profiles: list[ProfileResponse]


# =============================================================================
# Dashboard & settings
# =============================================================================


class DashboardSectionResponse(CamelModel):
    key: str
    title: str
    required_level: RoleLevel


class DashboardResponse(CamelModel):
    user_id: str
    name: str | None
    role_level: RoleLevel
    level_label: str
    department_id: int | None
    department_name: str | None
    role_name: str | None
    approval_pending: bool
    sections: list[DashboardSectionResponse]


class ApprovalModeResponse(CamelModel):
    strict: bool
    enforcement: str
