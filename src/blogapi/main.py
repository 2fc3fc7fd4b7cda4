"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan logs startup/shutdown and disposes the database
engine. Middleware, CORS, error handlers and routers all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogapi import __version__
from blogapi.api import api_router
from blogapi.config import settings
from blogapi.errors import register_exception_handlers
from blogapi.logging_config import configure_logging
from blogapi.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. Tables are not created here; run `blogapi init-db` or
    alembic migrations first.
    """
    logger.info(
        "blogapi.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("blogapi.shutdown")
    from blogapi.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Blog API",
        description="Blog posts with bearer-token auth and author-only editing",
        version=__version__,
        lifespan=lifespan,
    )

    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: blogapi.main:app)
app = create_app()
