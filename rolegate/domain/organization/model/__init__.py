"""Organization reference data models."""

from .department import Department
from .role import Role, validate_stored_level

__all__ = ["Department", "Role", "validate_stored_level"]
