"""
UserHub Backend - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the Database handle, registers middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`userhub.main:app` or `python -m userhub`) and the tests,
       which call create_app() with their own settings and database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:      GET /   /users CRUD   GET /health     │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→400 │ NotFound→404 │ Database→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create tables if DB_CREATE_TABLES is set
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from userhub import __version__
from userhub.config import Settings, settings as default_settings
from userhub.database import Database
from userhub.exceptions import DatabaseError, NotFoundError, ValidationError
from userhub.middleware.logging import RequestLoggingMiddleware
from userhub.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from userhub.routes import health, pages, users
from userhub.schemas.user import describe_validation_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(config.log_level)
    logger.info("UserHub Backend starting up...")

    if config.db_create_tables:
        await database.create_all()
        logger.info("Database tables ensured")

    logger.info("Server ready on port %d", config.port)

    yield

    logger.info("UserHub Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes. Every error body is `{"message": ...}`.

        RequestValidationError → 400 (malformed path or query parameters)
        ValidationError        → 400
        NotFoundError          → 404
        DatabaseError          → 500
        Exception              → 500 (stack trace logged, never returned)

    The catch-all handler runs in Starlette's ServerErrorMiddleware, outside
    RequestIDMiddleware, so it copies the request ID header itself.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = describe_validation_errors(exc.errors())
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred."},
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-derived
                  module settings.
        database: Storage handle to serve requests from; built from
                  `settings` when omitted.
    """
    config = settings or default_settings

    app = FastAPI(
        title="UserHub API",
        description="CRUD service for user records.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database or Database.from_settings(config)

    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


# uvicorn expects `userhub.main:app` to be importable
app = create_app()
