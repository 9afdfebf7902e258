"""Profile domain models."""

from .profile import Profile, ProfileChanges, ProfileId
from .status import ProfileShape, ProfileState, ProfileStatus, is_profile_complete

__all__ = [
    "Profile",
    "ProfileChanges",
    "ProfileId",
    "ProfileShape",
    "ProfileState",
    "ProfileStatus",
    "is_profile_complete",
]
