"""Admin routes for profile review."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from rolegate.application.api.v1.schemas import (
    ProfileListResponse,
    ProfileResponse,
    ReviewProfileRequest,
)
from rolegate.domain.profile.command.review_profile import ReviewProfile, ReviewProfileHandler
from rolegate.domain.profile.model.profile import ProfileChanges
from rolegate.domain.profile.query.get_profile import ListProfiles, ListProfilesHandler

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


@router.get("/profiles", response_model=ProfileListResponse)
async def list_profiles(
    handler: FromDishka[ListProfilesHandler],
    pending: bool = Query(False, description="Only complete profiles awaiting approval"),
) -> ProfileListResponse:
    """List profiles. Requires SUPER_ADMIN."""
    result = await handler.run(ListProfiles(pending_only=pending))
    return ProfileListResponse(profiles=[ProfileResponse.model_validate(p) for p in result.profiles])


@router.patch("/profiles/{user_id}", response_model=ProfileResponse)
async def review_profile(
    user_id: str,
    body: ReviewProfileRequest,
    handler: FromDishka[ReviewProfileHandler],
) -> ProfileResponse:
    """Approve, revoke or reassign a profile. Requires SUPER_ADMIN."""
    provided = body.model_dump(exclude_unset=True)
    approved = provided.pop("approved", None)
    result = await handler.run(
        ReviewProfile(user_id=user_id, changes=ProfileChanges(**provided), approved=approved)
    )
    return ProfileResponse.model_validate(result.profile)
