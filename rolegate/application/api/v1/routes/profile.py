"""Self-service profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response

from rolegate.application.api.v1.access import APPROVAL_HEADER
from rolegate.application.api.v1.schemas import (
    CreateProfileRequest,
    ProfileResponse,
    UpdateProfileRequest,
)
from rolegate.domain.profile.command.create_profile import CreateProfile, CreateProfileHandler
from rolegate.domain.profile.command.update_profile import UpdateProfile, UpdateProfileHandler
from rolegate.domain.profile.model.profile import ProfileChanges
from rolegate.domain.profile.query.get_profile import GetOwnProfile, GetOwnProfileHandler

router = APIRouter(prefix="/profile", tags=["Profile"], route_class=DishkaRoute)


@router.get("", response_model=ProfileResponse | None)
async def get_own_profile(
    handler: FromDishka[GetOwnProfileHandler],
) -> ProfileResponse | None:
    """Get the caller's profile, or null if none exists yet."""
    result = await handler.run(GetOwnProfile())
    if result.profile is None:
        return None
    return ProfileResponse.model_validate(result.profile)


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
    body: CreateProfileRequest,
    handler: FromDishka[CreateProfileHandler],
) -> ProfileResponse:
    """Create the caller's profile. New profiles always await approval."""
    result = await handler.run(
        CreateProfile(
            name=body.name,
            department_id=body.department_id,
            role_id=body.role_id,
        )
    )
    return ProfileResponse.model_validate(result.profile)


@router.patch("", response_model=ProfileResponse)
async def update_own_profile(
    body: UpdateProfileRequest,
    response: Response,
    handler: FromDishka[UpdateProfileHandler],
) -> ProfileResponse:
    """Edit the caller's profile. Editing an approved profile revokes its approval."""
    changes = ProfileChanges(**body.model_dump(exclude_unset=True))
    result = await handler.run(UpdateProfile(changes=changes))
    if result.approval_revoked:
        response.headers[APPROVAL_HEADER] = "revoked"
    return ProfileResponse.model_validate(result.profile)
