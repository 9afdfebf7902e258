"""Error hierarchy for RoleGate.

Error layers:
- RoleGateError: Base class for all RoleGate errors
- DomainError: Business rule violations, denials, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage outages (500 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
Every error carries a stable machine-readable ``code`` that callers branch on.
"""


class RoleGateError(Exception):
    """Base class for all RoleGate errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(RoleGateError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class ConflictError(DomainError):
    """Resource already exists or is still referenced."""


class AuthenticationError(DomainError):
    """No valid session for the request."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHENTICATED") -> None:
        super().__init__(message, code=code)


class AuthorizationError(DomainError):
    """Authenticated, but not allowed to perform this operation."""


# =============================================================================
# Infrastructure Errors (system-level failures - 500)
# =============================================================================


class InfrastructureError(RoleGateError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """The backing store could not be reached or failed mid-operation."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
