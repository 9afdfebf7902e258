"""Response decoration derived from the resolved access context."""

from fastapi import Response

from rolegate.domain.shared.authorization.enforce import GuardedHandler

APPROVAL_HEADER = "X-Profile-Approval"


def mark_approval(response: Response, handler: GuardedHandler) -> None:
    """Flag responses served to a complete but unapproved profile in advisory mode."""
    if handler.approval_pending:
        response.headers[APPROVAL_HEADER] = "pending"
