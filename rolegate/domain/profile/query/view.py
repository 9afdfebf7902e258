"""Read model for profiles."""

from datetime import datetime

from pydantic import BaseModel

from rolegate.domain.organization.query.view import DepartmentView, RoleView
from rolegate.domain.profile.model.profile import Profile
from rolegate.domain.profile.model.status import ProfileState


class ProfileView(BaseModel):
    id: str
    user_id: str
    name: str | None
    department_id: int | None
    role_id: int | None
    approved: bool
    state: ProfileState
    created_at: datetime
    updated_at: datetime
    role: RoleView | None = None
    department: DepartmentView | None = None

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileView":
        return cls(
            id=str(profile.id),
            user_id=profile.user_id,
            name=profile.name,
            department_id=profile.department_id,
            role_id=profile.role_id,
            approved=profile.approved,
            state=profile.state,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            role=RoleView.from_entity(profile.role) if profile.role else None,
            department=DepartmentView.from_entity(profile.department) if profile.department else None,
        )
