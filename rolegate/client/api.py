"""Async HTTP client for the RoleGate API."""

import logging
from typing import Any

import httpx

from rolegate.application.api.v1.schemas import (
    ApprovalModeResponse,
    DashboardResponse,
    DepartmentResponse,
    ProfileListResponse,
    ProfileResponse,
    RoleResponse,
)
from rolegate.client.cache import InvalidationTag, ProfileCache

logger = logging.getLogger(__name__)

# HTTP client timeout configuration
_HTTP_TIMEOUT = httpx.Timeout(
    connect=5.0,  # Connection timeout
    read=10.0,  # Read timeout
    write=5.0,  # Write timeout
    pool=5.0,  # Pool timeout
)

DEFAULT_API_PREFIX = "/api/v1"


class ApiError(Exception):
    """Non-2xx response from the API, carrying the server's stable code."""

    def __init__(self, status: int, code: str, message: str) -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(f"{status} {code}: {message}")


class RoleGateClient:
    """Thin async client over the /api/v1 surface.

    The session token is sent as a Bearer header. Pass ``transport`` to talk
    to an in-process ASGI app (tests) instead of the network. With a
    ``cache``, every successful profile mutation invalidates the affected
    identity's snapshot (``identity`` is the token's subject).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        api_prefix: str = DEFAULT_API_PREFIX,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: ProfileCache | None = None,
        identity: str | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + api_prefix,
            headers=headers,
            timeout=_HTTP_TIMEOUT,
            transport=transport,
        )
        self.last_approval_header: str | None = None
        self.cache = cache
        self.identity = identity

    async def __aenter__(self) -> "RoleGateClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, path, **kwargs)
        self.last_approval_header = response.headers.get("X-Profile-Approval")
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = ApiError(
            status=response.status_code,
            code=str(body.get("code") or "HTTP_ERROR"),
            message=str(body.get("message") or response.reason_phrase),
        )
        logger.debug("API error on %s %s: %s", method, path, error)
        raise error

    def _mutated(self, identity: str | None) -> None:
        if self.cache is not None:
            self.cache.invalidate(InvalidationTag.PROFILE_MUTATED, identity)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self) -> ProfileResponse | None:
        data = await self._request("GET", "/profile")
        return ProfileResponse.model_validate(data) if data is not None else None

    async def create_profile(self, name: str, department_id: int, role_id: int) -> ProfileResponse:
        data = await self._request(
            "POST",
            "/profile",
            json={"name": name, "departmentId": department_id, "roleId": role_id},
        )
        self._mutated(self.identity)
        return ProfileResponse.model_validate(data)

    async def update_profile(self, **changes: Any) -> ProfileResponse:
        """Self-service edit. Keyword names are snake_case field names."""
        data = await self._request("PATCH", "/profile", json=changes)
        self._mutated(self.identity)
        return ProfileResponse.model_validate(data)

    async def get_dashboard(self) -> DashboardResponse:
        return DashboardResponse.model_validate(await self._request("GET", "/dashboard"))

    # -------------------------------------------------------------------------
    # Reference data
    # -------------------------------------------------------------------------

    async def list_departments(self) -> list[DepartmentResponse]:
        data = await self._request("GET", "/departments")
        return [DepartmentResponse.model_validate(d) for d in data]

    async def list_roles(self) -> list[RoleResponse]:
        data = await self._request("GET", "/roles")
        return [RoleResponse.model_validate(r) for r in data]

    async def get_approval_mode(self) -> ApprovalModeResponse:
        return ApprovalModeResponse.model_validate(await self._request("GET", "/settings/approval-mode"))

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    async def list_profiles(self, pending_only: bool = False) -> list[ProfileResponse]:
        data = await self._request("GET", "/admin/profiles", params={"pending": pending_only})
        return ProfileListResponse.model_validate(data).profiles

    async def review_profile(self, user_id: str, **changes: Any) -> ProfileResponse:
        """Approve/revoke (``approved=``) and/or reassign a profile."""
        data = await self._request("PATCH", f"/admin/profiles/{user_id}", json=changes)
        self._mutated(user_id)
        return ProfileResponse.model_validate(data)
