"""Profile entity: binds an external identity to department, role and approval."""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, RootModel

from rolegate.domain.auth.model.role_level import RoleLevel, normalize_level
from rolegate.domain.organization.model.department import Department
from rolegate.domain.organization.model.role import Role
from rolegate.domain.profile.model.status import ProfileState, ProfileStatus
from rolegate.domain.shared.error import InvalidStateError, ValidationError
from rolegate.domain.shared.model.entity import Entity

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "department_id", "role_id")


class ProfileId(RootModel[UUID]):
    """Unique identifier for a Profile."""

    @classmethod
    def generate(cls) -> "ProfileId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class ProfileChanges(BaseModel):
    """Field edits to a profile. Only explicitly provided fields are applied."""

    name: str | None = None
    department_id: int | None = None
    role_id: int | None = None

    def provided(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}

    def is_empty(self) -> bool:
        return not self.model_fields_set


class Profile(Entity):
    id: ProfileId
    user_id: str
    name: str | None
    department_id: int | None
    role_id: int | None
    approved: bool = False
    created_at: datetime
    updated_at: datetime
    role: Role | None = None
    department: Department | None = None

    @classmethod
    def create(
        cls,
        user_id: str,
        name: str | None,
        department_id: int | None,
        role_id: int | None,
    ) -> "Profile":
        """Create a new profile. Always starts unapproved.

        Raises ValidationError if any required field is missing: an incomplete
        creation is rejected rather than stored.
        """
        values = {"name": name, "department_id": department_id, "role_id": role_id}
        for field in REQUIRED_FIELDS:
            value = values[field]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"Missing required field: {field}", field=field)

        now = datetime.now(UTC)
        return cls(
            id=ProfileId.generate(),
            user_id=user_id,
            name=name.strip() if name else name,
            department_id=department_id,
            role_id=role_id,
            approved=False,
            created_at=now,
            updated_at=now,
        )

    @property
    def status(self) -> ProfileStatus:
        return ProfileStatus.derive(self)

    @property
    def state(self) -> ProfileState:
        return self.status.state

    @property
    def role_level(self) -> RoleLevel:
        """Level granted by the assigned role, OPEN when none is loaded."""
        if self.role is None:
            return RoleLevel.OPEN
        return normalize_level(self.role.level)

    def _apply(self, changes: ProfileChanges) -> None:
        for field, value in changes.provided().items():
            if field == "name":
                if value is None or not value.strip():
                    raise ValidationError("Name must not be blank", field="name")
                value = value.strip()
            elif value is None:
                raise ValidationError(f"{field} cannot be cleared", field=field)
            setattr(self, field, value)
            # Loaded relations describe the old reference
            if field == "role_id":
                self.role = None
            elif field == "department_id":
                self.department = None
        self.updated_at = datetime.now(UTC)

    def apply_owner_edit(self, changes: ProfileChanges) -> None:
        """Apply a self-service edit.

        Any owner edit of an approved profile revokes the approval in the same
        write; the profile has to be reviewed again.
        """
        if changes.is_empty():
            raise ValidationError("No fields to update")
        before = self.state
        self._apply(changes)
        if self.approved:
            self.approved = False
            logger.info(
                "Owner edit revoked approval: user_id=%s, fields=%s",
                self.user_id,
                sorted(changes.model_fields_set),
            )
        logger.info("Profile %s: %s -> %s (owner edit)", self.user_id, before, self.state)

    def apply_admin_edit(self, changes: ProfileChanges, approved: bool | None = None) -> None:
        """Apply an administrator edit. Approval is never revoked implicitly."""
        if changes.is_empty() and approved is None:
            raise ValidationError("No fields to update")
        before = self.state
        if not changes.is_empty():
            self._apply(changes)
        if approved is not None:
            self.set_approval(approved)
        logger.info("Profile %s: %s -> %s (admin edit)", self.user_id, before, self.state)

    def set_approval(self, approved: bool) -> None:
        """Toggle approval. Only complete profiles can be approved."""
        if approved and not self.status.is_complete:
            raise InvalidStateError(
                "Cannot approve an incomplete profile",
                code="INVALID_TRANSITION",
            )
        self.approved = approved
        self.updated_at = datetime.now(UTC)
