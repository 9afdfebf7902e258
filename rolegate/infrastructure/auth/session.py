"""Session token extraction from HTTP requests."""

from collections.abc import Mapping


def session_token(headers: Mapping[str, str], cookies: Mapping[str, str], cookie_name: str) -> str | None:
    """Return the raw session token of a request.

    A ``Bearer`` Authorization header wins over the session cookie.
    """
    auth_header = headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None  # Remove "Bearer " prefix
    return cookies.get(cookie_name) or None
