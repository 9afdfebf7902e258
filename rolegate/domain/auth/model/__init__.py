"""Auth domain models."""

from .identity import Anonymous, Identity, Principal
from .role_level import RoleLevel, has_required_level, level_label, normalize_level

__all__ = [
    "Anonymous",
    "Identity",
    "Principal",
    "RoleLevel",
    "has_required_level",
    "level_label",
    "normalize_level",
]
