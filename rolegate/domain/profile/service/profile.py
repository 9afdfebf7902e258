"""Profile service: lifecycle operations on profiles."""

import logging

from rolegate.domain.organization.port.repository import DepartmentRepository, RoleRepository
from rolegate.domain.profile.model.profile import Profile, ProfileChanges
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.domain.shared.error import ConflictError, NotFoundError, ValidationError
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)

PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"
PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"


class ProfileService(Service):
    """Creates and edits profiles.

    Authorization has already happened in the handler wrapper; this service
    enforces lifecycle rules only.
    """

    _profile_repo: ProfileRepository
    _department_repo: DepartmentRepository
    _role_repo: RoleRepository

    async def _check_references(self, changes: ProfileChanges) -> None:
        provided = changes.provided()
        department_id = provided.get("department_id")
        if department_id is not None and await self._department_repo.get(department_id) is None:
            raise ValidationError("Invalid department ID", field="departmentId")
        role_id = provided.get("role_id")
        if role_id is not None and await self._role_repo.get(role_id) is None:
            raise ValidationError("Invalid role ID", field="roleId")

    async def _reload(self, user_id: str) -> Profile:
        profile = await self._profile_repo.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Profile not found", code=PROFILE_NOT_FOUND)
        return profile

    async def get(self, user_id: str) -> Profile | None:
        return await self._profile_repo.get_by_user_id(user_id)

    async def list_all(self) -> list[Profile]:
        return await self._profile_repo.list_all()

    async def create(
        self,
        user_id: str,
        name: str | None,
        department_id: int | None,
        role_id: int | None,
    ) -> Profile:
        """Create the caller's profile (NO_PROFILE -> COMPLETE_UNAPPROVED)."""
        if await self._profile_repo.get_by_user_id(user_id) is not None:
            logger.warning("Profile creation refused, already exists: user_id=%s", user_id)
            raise ConflictError("Profile already exists for this user", code=PROFILE_ALREADY_EXISTS)

        profile = Profile.create(
            user_id=user_id,
            name=name,
            department_id=department_id,
            role_id=role_id,
        )
        if await self._department_repo.get(profile.department_id) is None or (
            await self._role_repo.get(profile.role_id) is None
        ):
            raise ValidationError("Invalid department or role selected.")

        await self._profile_repo.add(profile)
        logger.info("Profile created: user_id=%s, state=%s", user_id, profile.state)
        return await self._reload(user_id)

    async def update_own(self, user_id: str, changes: ProfileChanges) -> Profile:
        """Self-service edit. Revokes approval if the profile was approved."""
        if changes.is_empty():
            raise ValidationError("No fields to update")
        profile = await self._profile_repo.get_by_user_id(user_id)
        if profile is None or profile.user_id != user_id:
            raise NotFoundError("Profile not found or unauthorized", code=PROFILE_NOT_FOUND)

        await self._check_references(changes)
        profile.apply_owner_edit(changes)
        await self._profile_repo.update(profile)
        logger.info("Profile updated by owner: user_id=%s, approved=%s", user_id, profile.approved)
        return await self._reload(user_id)

    async def review(
        self,
        user_id: str,
        changes: ProfileChanges,
        approved: bool | None,
        reviewer_id: str,
    ) -> Profile:
        """Administrator edit: reassign department/role and/or toggle approval."""
        profile = await self._profile_repo.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError(f"Profile for user {user_id} not found", code=PROFILE_NOT_FOUND)

        await self._check_references(changes)
        profile.apply_admin_edit(changes, approved=approved)
        await self._profile_repo.update(profile)
        logger.info(
            "Profile reviewed: user_id=%s, reviewer=%s, approved=%s",
            user_id,
            reviewer_id,
            profile.approved,
        )
        return await self._reload(user_id)
