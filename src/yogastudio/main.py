"""FastAPI application factory.

create_app() returns a configured FastAPI instance: middleware, the
app-wide auth filter dependency, exception handlers and routers.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yogastudio import __version__
from yogastudio.api import api_router
from yogastudio.auth.dependencies import authenticate_request
from yogastudio.config import settings
from yogastudio.errors import register_exception_handlers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "yogastudio.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("yogastudio.shutdown")

    from yogastudio.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Yoga Studio",
        description="Booking backend for yoga sessions",
        version=__version__,
        lifespan=lifespan,
        # Auth filter runs for every request, before its handler.
        dependencies=[Depends(authenticate_request)],
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → auth filter → handler

    from yogastudio.middleware.request_id import RequestIdMiddleware
    from yogastudio.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: yogastudio.main:app)
app = create_app()
