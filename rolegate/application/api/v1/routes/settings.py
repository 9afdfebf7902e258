"""Public runtime settings the client needs."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from rolegate.application.api.v1.schemas import ApprovalModeResponse
from rolegate.config import Config

router = APIRouter(prefix="/settings", tags=["Settings"], route_class=DishkaRoute)


@router.get("/approval-mode", response_model=ApprovalModeResponse)
async def get_approval_mode(config: FromDishka[Config]) -> ApprovalModeResponse:
    """Whether unapproved profiles are hard-blocked (strict) or flagged (advisory)."""
    return ApprovalModeResponse(
        strict=config.approval.strict,
        enforcement=config.approval.enforcement.value,
    )
