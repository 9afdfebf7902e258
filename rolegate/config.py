import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rolegate.domain.shared.authorization.decision import ApprovalEnforcement


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the YAML file named by ROLEGATE_CONFIG_FILE.

    A missing variable or file contributes nothing; env vars still apply.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data = _read_yaml(os.environ.get("ROLEGATE_CONFIG_FILE"))

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data


def _read_yaml(config_file: str | None) -> dict[str, Any]:
    if not config_file:
        return {}
    path = Path(config_file).expanduser()
    if not path.is_file():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level of a config file must be a mapping")
    return data


class Server(BaseModel):
    """HTTP surface identity and the API mount point."""

    name: str = "RoleGate"
    version: str = "0.1.0"
    description: str = "Role and approval gated access for department staff"
    api_prefix: str = "/api/v1"


class DatabaseConfig(BaseModel):
    """Store location. SQLite paths may use ~; the parent directory is created."""

    url: str = "sqlite+aiosqlite:///~/.local/share/rolegate/rolegate.db"
    echo: bool = False
    auto_create: bool = True  # Create missing tables at start-up


class LoggingConfig(BaseModel):
    """Root logger level and format (ROLEGATE_LOGGING__LEVEL=DEBUG etc.)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from ROLEGATE_LOG_FILE env var."""
        return os.environ.get("ROLEGATE_LOG_FILE")


# =============================================================================
# Authentication Configuration
# =============================================================================


class JwtConfig(BaseModel):
    """Session token verification settings (tokens are minted by the identity provider)."""

    secret: str = ""  # Must be set in production
    algorithm: str = "HS256"
    audience: str = "authenticated"
    access_token_expire_minutes: int = 60


class AuthConfig(BaseModel):
    """Authentication configuration."""

    jwt: JwtConfig = JwtConfig()
    session_cookies: list[str] = ["access_token", "refresh_token"]
    login_path: str = "/login"
    # Path prefixes the edge interceptor never challenges
    public_paths: list[str] = [
        "/login",
        "/signup",
        "/auth/",
        "/forbidden",
        "/assets/",
        "/static/",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
        "/api/v1/auth/",
        "/api/v1/health",
        "/api/v1/settings/",
    ]
    # Reference data is readable without a session (GET/HEAD only)
    public_read_paths: list[str] = [
        "/api/v1/departments",
        "/api/v1/roles",
    ]

    @property
    def session_cookie(self) -> str:
        """Cookie carrying the access token."""
        return self.session_cookies[0]


class ApprovalConfig(BaseModel):
    """Profile approval enforcement.

    strict=True hard-blocks unapproved profiles from role-gated operations;
    strict=False lets them through with an advisory flag.
    """

    strict: bool = False

    @property
    def enforcement(self) -> ApprovalEnforcement:
        return ApprovalEnforcement.STRICT if self.strict else ApprovalEnforcement.ADVISORY


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()
    approval: ApprovalConfig = ApprovalConfig()

    model_config = {
        "env_prefix": "ROLEGATE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows ROLEGATE_APPROVAL__STRICT=true
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - ROLEGATE_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "aiosqlite", "sqlalchemy.engine")


def configure_logging(config: LoggingConfig) -> None:
    """Install a single root handler (stderr, or ROLEGATE_LOG_FILE when set).

    Safe to call more than once: previous root handlers are replaced.
    """
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Authorization decisions follow the configured level, not the library floor
    logging.getLogger("rolegate.authz").setLevel(config.level)
    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
