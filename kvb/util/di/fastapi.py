"""Dishka integration for FastAPI using KVB's Scope.UOW per request."""

from dishka import AsyncContainer
from fastapi import FastAPI
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from kvb.util.di.scope import Scope as KVBScope


class ContainerMiddleware:
    """Opens a Scope.UOW child container around every HTTP request.

    ``dishka.integrations.fastapi`` enters ``dishka.Scope.REQUEST``, which
    does not exist in our scope hierarchy. Lifespan and other non-HTTP
    events pass through untouched.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive, send=send)
        container: AsyncContainer = request.app.state.dishka_container
        async with container(scope=KVBScope.UOW) as request_container:
            request.state.dishka_container = request_container
            await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app: FastAPI) -> None:
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
