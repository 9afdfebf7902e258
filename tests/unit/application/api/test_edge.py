"""Tests for edge interceptor path classification."""

import pytest

from rolegate.application.api.rest.edge import is_public
from rolegate.config import Config


@pytest.fixture
def config() -> Config:
    return Config()  # type: ignore[call-arg]


class TestIsPublic:
    @pytest.mark.parametrize(
        "path",
        [
            "/login",
            "/signup",
            "/auth/callback",
            "/assets/app.js",
            "/api/v1/health",
            "/api/v1/settings/approval-mode",
            "/openapi.json",
        ],
    )
    def test_public_paths(self, config: Config, path: str) -> None:
        assert is_public(path, "GET", config)
        assert is_public(path, "POST", config)

    @pytest.mark.parametrize("path", ["/api/v1/departments", "/api/v1/roles/3"])
    def test_reference_reads_are_public(self, config: Config, path: str) -> None:
        assert is_public(path, "GET", config)
        assert is_public(path, "head", config)

    @pytest.mark.parametrize("method", ["POST", "PATCH", "DELETE"])
    def test_reference_writes_are_not(self, config: Config, method: str) -> None:
        assert not is_public("/api/v1/departments/1", method, config)

    @pytest.mark.parametrize("path", ["/dashboard", "/api/v1/profile", "/loginx", "/api/v1/rolesx"])
    def test_everything_else_is_protected(self, config: Config, path: str) -> None:
        assert not is_public(path, "GET", config)
