"""Centralized error transformation for API routes.

Maps RoleGate errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from rolegate.domain.shared.error import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    RoleGateError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    InvalidStateError: 409,
    ConflictError: 409,
    AuthenticationError: 401,
    AuthorizationError: 403,
}


def map_error(error: RoleGateError) -> HTTPException:
    """Map a RoleGate error to an HTTPException.

    Args:
        error: The RoleGate error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    if isinstance(error, InfrastructureError):
        # Internal detail stays in the logs
        return HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": "Internal server error"},
        )

    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, AuthenticationError):
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown RoleGateError subclasses
    return HTTPException(status_code=500, detail=detail)
