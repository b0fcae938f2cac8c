"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup (logging, DB, frontend page).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError

from userapi.api.endpoints.frontend import load_frontend
from userapi.api.router import api_router
from userapi.config import Settings, get_settings
from userapi.core.errors import UserApiError
from userapi.core.logging import setup_logging
from userapi.db.session import open_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging, datastore, frontend page check. Any failure here stops the server."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    app.state.database = await open_database(settings.database_url, echo=settings.debug)
    try:
        load_frontend(settings.frontend_path)
        logger.info("Go to http://localhost:%d/frontend to see the frontend.", settings.port)
        logger.info("Go to http://localhost:%d/users to see the API.", settings.port)
        yield
    finally:
        await app.state.database.dispose()
        logger.info("%s shutting down", settings.app_name)


async def user_api_error_handler(request: Request, exc: UserApiError):
    logger.warning(
        "%s: %s",
        type(exc).__name__,
        exc.message,
        extra={"path": request.url.path, "error_code": exc.http_status},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database operation failed"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="CRUD service over a single user record type, plus a static frontend page.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router)

    app.add_exception_handler(UserApiError, user_api_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    return app


app = create_app()
