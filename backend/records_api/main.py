"""
Records API Backend - FastAPI Application

Death record management with bearer-token protected CRUD over MongoDB.
"""
import logging
import sys
from contextlib import asynccontextmanager
from functools import partial
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from records_api.config import Settings, get_settings
from records_api.core.exceptions import ConfigurationError
from records_api.core.logging import configure_logging
from records_api.database.connections import PersistenceClient
from records_api.database.registry import create_indexes
from records_api.routers import auth, health, records, stats

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(
    settings: Optional[Settings] = None,
    persistence: Optional[PersistenceClient] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())
        persistence: Pre-built persistence client; one is created from
            settings at startup when omitted
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Startup:
        - Connect to MongoDB (retrying in the background on failure)
        - Create indexes on every (re)connect

        Shutdown:
        - Stop reconnecting and close the connection
        """
        configure_logging(settings.log_level)
        logger.info("Starting up Records API...")

        if settings.uses_default_secret:
            logger.warning("JWT_SECRET_KEY is not set; using the insecure default secret")

        client = persistence or PersistenceClient.from_settings(settings)
        client.add_connect_hook(
            partial(create_indexes, enforce_unique_usernames=settings.enforce_unique_usernames)
        )

        try:
            await client.start()
        except ConfigurationError as e:
            logger.critical("%s", e)
            sys.exit(1)

        app.state.persistence = client

        yield

        logger.info("Shutting down Records API...")
        await client.close()

    app = FastAPI(
        title="Records API",
        description="""
## Death Record Management API

### Authentication
Create an account with `POST /api/signup`, then obtain a token with
`POST /api/signin`. All `/api/records` and `/api/stats` endpoints require:
```
Authorization: Bearer <token>
```
        """,
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(records.router)
    app.include_router(stats.router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Records API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ...}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("Invalid request payload on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request payload"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


app = create_app()


def run() -> None:
    """
    Serve the app with uvicorn on the configured host and port.

    Exits with status 1 when MONGODB_URI is not set. Checked here because a
    lifespan failure makes uvicorn exit with its own startup error code.
    """
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.mongodb_uri:
        logger.critical("MONGODB_URI is not defined in environment variables")
        sys.exit(1)
    uvicorn.run("records_api.main:app", host=settings.host, port=settings.port)
