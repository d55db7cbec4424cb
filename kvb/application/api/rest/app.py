import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kvb.application.api.v1.errors import map_kvb_error
from kvb.application.api.v1.routes import databases, health, keys
from kvb.application.di import create_container
from kvb.config import Config, configure_logging
from kvb.domain.recommendation.service import RecommendationChecker
from kvb.domain.shared.error import KVBError
from kvb.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: AsyncContainer = app.state.dishka_container
    yield
    # Pending recommendation checks still use store connections
    checker = await container.get(RecommendationChecker)
    await checker.drain()
    await container.close()


async def handle_kvb_error(request: Request, exc: KVBError) -> JSONResponse:
    http_exc = map_kvb_error(exc)
    return JSONResponse(status_code=http_exc.status_code, content=http_exc.detail)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Internal server error"},
    )


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Build the REST application.

    Used as a uvicorn factory; tests pass their own config and container.
    """
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    app = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )
    logfire.instrument_fastapi(app)
    setup_dishka(container or create_container(config), app)

    for router in (health.router, databases.router, keys.router):
        app.include_router(router, prefix=API_PREFIX)

    app.add_exception_handler(KVBError, handle_kvb_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
    return app
