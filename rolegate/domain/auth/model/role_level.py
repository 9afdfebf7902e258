"""Privilege tiers and the single level comparison primitive."""

from enum import IntEnum
from typing import Any


class RoleLevel(IntEnum):
    """Ordered privilege tiers.

    Values are not contiguous: SUPER_ADMIN sits at 10 so that tiers can be
    inserted below it without renumbering. Compare by value, never by position.
    """

    OPEN = 0  # Any authenticated user
    ASSISTANT = 1  # Entry level / assistant
    PROFESSIONAL = 2  # Qualified professionals
    SENIOR = 3  # Senior professionals
    MANAGER = 4  # Managers, department heads
    EXECUTIVE = 5  # Service managers, consultants
    SUPER_ADMIN = 10  # Full administrative control


_BY_VALUE: dict[int, RoleLevel] = {level.value: level for level in RoleLevel}


def normalize_level(value: Any) -> RoleLevel:
    """Map a stored level to a defined RoleLevel, degrading to OPEN.

    Only exact defined values are recognized. Gaps (6..9), negatives, bools,
    None and non-integers all become OPEN; no error is raised.
    """
    if isinstance(value, RoleLevel):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        return RoleLevel.OPEN
    return _BY_VALUE.get(value, RoleLevel.OPEN)


def has_required_level(actual_level: Any, required_level: RoleLevel) -> bool:
    """Return True if actual_level satisfies required_level.

    SUPER_ADMIN satisfies every requirement, including values with no member.
    """
    level = normalize_level(actual_level)
    return level == RoleLevel.SUPER_ADMIN or level >= required_level


def level_label(value: Any) -> str:
    """Human-readable name of a stored level ("Unknown" for undefined values)."""
    if isinstance(value, bool) or not isinstance(value, int) or value not in _BY_VALUE:
        return "Unknown"
    return _BY_VALUE[value].name
