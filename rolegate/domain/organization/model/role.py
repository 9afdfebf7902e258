"""Role: named privilege tier inside a department."""

from rolegate.domain.auth.model.role_level import RoleLevel, level_label, normalize_level
from rolegate.domain.organization.model.department import Department
from rolegate.domain.shared.error import ValidationError
from rolegate.domain.shared.model.entity import Entity

MIN_STORED_LEVEL = int(RoleLevel.OPEN)
MAX_STORED_LEVEL = int(RoleLevel.SUPER_ADMIN)


def validate_stored_level(level: object) -> int:
    """Check a level before it is persisted on a role.

    Integers in [OPEN, SUPER_ADMIN] are accepted, including the undefined
    gap values which compare as OPEN.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValidationError("Role level must be an integer", field="level")
    if level > MAX_STORED_LEVEL:
        raise ValidationError("Role level cannot exceed SUPER_ADMIN", field="level")
    if level < MIN_STORED_LEVEL:
        raise ValidationError("Role level cannot be negative", field="level")
    return level


class Role(Entity):
    id: int
    name: str
    level: int
    department_id: int
    department: Department | None = None

    @property
    def role_level(self) -> RoleLevel:
        """The level this role grants when compared."""
        return normalize_level(self.level)

    @property
    def label(self) -> str:
        return level_label(self.level)
