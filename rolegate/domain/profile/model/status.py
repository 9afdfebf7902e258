"""Derived profile status shared by the server gate and the client reconciler.

Both sides must branch on exactly the same three booleans, so the derivation
lives in one function that accepts anything shaped like a profile record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class ProfileShape(Protocol):
    """The record fields status derivation reads."""

    name: str | None
    department_id: int | None
    role_id: int | None
    approved: bool


class ProfileState(StrEnum):
    NO_PROFILE = "NO_PROFILE"
    INCOMPLETE = "INCOMPLETE"
    COMPLETE_UNAPPROVED = "COMPLETE_UNAPPROVED"
    COMPLETE_APPROVED = "COMPLETE_APPROVED"


def is_profile_complete(profile: ProfileShape) -> bool:
    """name, department and role must all be present."""
    name = profile.name
    return (
        name is not None
        and bool(name.strip())
        and profile.department_id is not None
        and profile.role_id is not None
    )


@dataclass(frozen=True)
class ProfileStatus:
    has_profile: bool
    is_complete: bool
    is_approved: bool

    @classmethod
    def derive(cls, profile: ProfileShape | None) -> ProfileStatus:
        if profile is None:
            return cls(has_profile=False, is_complete=False, is_approved=False)
        return cls(
            has_profile=True,
            is_complete=is_profile_complete(profile),
            is_approved=bool(profile.approved),
        )

    @property
    def state(self) -> ProfileState:
        if not self.has_profile:
            return ProfileState.NO_PROFILE
        # An approved flag on an incomplete record does not make it usable
        if not self.is_complete:
            return ProfileState.INCOMPLETE
        if self.is_approved:
            return ProfileState.COMPLETE_APPROVED
        return ProfileState.COMPLETE_UNAPPROVED
