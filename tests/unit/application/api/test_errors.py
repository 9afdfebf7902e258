"""Tests for domain/infrastructure error to HTTP mapping."""

from rolegate.application.api.v1.errors import map_error
from rolegate.domain.shared.error import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)


class TestMapError:
    def test_not_found(self) -> None:
        exc = map_error(NotFoundError("Role 9 not found", code="ROLE_NOT_FOUND"))

        assert exc.status_code == 404
        assert exc.detail == {"code": "ROLE_NOT_FOUND", "message": "Role 9 not found"}

    def test_validation_error_carries_field(self) -> None:
        exc = map_error(ValidationError("Role level cannot exceed SUPER_ADMIN", field="level"))

        assert exc.status_code == 400
        assert exc.detail["code"] == "VALIDATION_ERROR"
        assert exc.detail["field"] == "level"

    def test_conflicts(self) -> None:
        assert map_error(ConflictError("in use", code="REFERENTIAL_CONFLICT")).status_code == 409
        assert map_error(InvalidStateError("nope", code="INVALID_TRANSITION")).status_code == 409

    def test_authentication_sets_challenge(self) -> None:
        exc = map_error(AuthenticationError())

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}
        assert exc.detail["code"] == "UNAUTHENTICATED"

    def test_authorization(self) -> None:
        exc = map_error(AuthorizationError("Profile pending approval", code="PROFILE_PENDING_APPROVAL"))

        assert exc.status_code == 403
        assert exc.detail["code"] == "PROFILE_PENDING_APPROVAL"

    def test_infrastructure_detail_is_hidden(self) -> None:
        exc = map_error(StorageUnavailableError("connection refused to db-1:5432"))

        assert exc.status_code == 500
        assert exc.detail == {"code": "INTERNAL_ERROR", "message": "Internal server error"}
