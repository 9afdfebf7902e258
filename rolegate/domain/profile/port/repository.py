"""Repository port for Profile persistence."""

from abc import abstractmethod
from typing import Protocol

from rolegate.domain.profile.model.profile import Profile
from rolegate.domain.shared.port import Port


class ProfileRepository(Port, Protocol):
    """Repository for Profile entity persistence.

    Reads return the profile with its role and department loaded.
    """

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get the profile bound to an external identity."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Profile]:
        """List every profile, oldest first."""
        ...

    @abstractmethod
    async def add(self, profile: Profile) -> None:
        """Insert a new profile. Raises ConflictError if the user already has one."""
        ...

    @abstractmethod
    async def update(self, profile: Profile) -> None:
        """Write all mutable fields of an existing profile (last write wins)."""
        ...

    @abstractmethod
    async def count_by_role(self, role_id: int) -> int:
        """Number of profiles assigned to a role."""
        ...

    @abstractmethod
    async def count_by_department(self, department_id: int) -> int:
        """Number of profiles assigned to a department."""
        ...
