"""Member dashboard route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response

from rolegate.application.api.v1.access import mark_approval
from rolegate.application.api.v1.schemas import DashboardResponse
from rolegate.domain.profile.query.get_profile import GetDashboard, GetDashboardHandler

router = APIRouter(prefix="/dashboard", tags=["Dashboard"], route_class=DishkaRoute)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    response: Response,
    handler: FromDishka[GetDashboardHandler],
) -> DashboardResponse:
    """Member landing data. Requires a complete profile with at least ASSISTANT level."""
    result = await handler.run(GetDashboard())
    mark_approval(response, handler)
    return DashboardResponse.model_validate(result)
