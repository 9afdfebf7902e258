import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from rolegate.application.api.rest.edge import EdgeInterceptorMiddleware
from rolegate.application.api.v1.errors import map_error
from rolegate.application.api.v1.routes import (
    admin,
    dashboard,
    departments,
    health,
    profile,
    roles,
    settings,
)
from rolegate.application.di import create_container
from rolegate.config import Config, configure_logging
from rolegate.domain.shared.authorization.startup import validate_all_handlers
from rolegate.domain.shared.error import InfrastructureError, RoleGateError
from rolegate.infrastructure.persistence.bootstrap import create_schema
from rolegate.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_create:
        engine = await container.get(AsyncEngine)
        await create_schema(engine)

    yield

    await container.close()


def _first_error_field(exc: RequestValidationError) -> str | None:
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            return ".".join(loc)
    return None


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info(
        "Starting %s v%s (approval enforcement: %s)",
        config.server.name,
        config.server.version,
        config.approval.enforcement,
    )

    # Validate all handlers have authorization declarations (fail fast)
    validate_all_handlers()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    # Outermost: session check before any container is opened
    app_instance.add_middleware(EdgeInterceptorMiddleware, config=config)

    prefix = config.server.api_prefix
    app_instance.include_router(health.router, prefix=prefix)
    app_instance.include_router(settings.router, prefix=prefix)
    app_instance.include_router(profile.router, prefix=prefix)
    app_instance.include_router(departments.router, prefix=prefix)
    app_instance.include_router(roles.router, prefix=prefix)
    app_instance.include_router(admin.router, prefix=prefix)
    app_instance.include_router(dashboard.router, prefix=prefix)

    # Global RoleGate error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(RoleGateError)
    async def rolegate_error_handler(request: Request, exc: RoleGateError):
        if isinstance(exc, InfrastructureError):
            logger.error(
                "Infrastructure error on %s %s: %s (%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code,
            )
        http_exc = map_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Malformed bodies, params and ids are client errors
    @app_instance.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        content = {"code": "VALIDATION_ERROR", "message": "Invalid request"}
        field = _first_error_field(exc)
        if field:
            content["field"] = field
        return JSONResponse(status_code=400, content=content)

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal server error"},
        )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: the serve command handles this
# In tests: configure in conftest.py
app = create_app()
