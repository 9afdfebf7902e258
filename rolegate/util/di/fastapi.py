"""Per-request dishka container for FastAPI, opened at Scope.UOW."""

from dishka import AsyncContainer
from fastapi import FastAPI
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from rolegate.util.di.scope import Scope as RoleGateScope


class ContainerMiddleware:
    """Opens one UOW container per HTTP request and closes it after the response.

    Closing the container commits the request's database session, so every
    write of a request lands in a single transaction. ``DishkaRoute`` reads the
    container from ``request.state``.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        root: AsyncContainer = request.app.state.dishka_container
        async with root({Request: request}, scope=RoleGateScope.UOW) as uow:
            request.state.dishka_container = uow
            await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app: FastAPI) -> None:
    """Attach the APP container and the per-request middleware."""
    app.state.dishka_container = container
    app.add_middleware(ContainerMiddleware)
