"""
Q&A Forum Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn qaforum.main:app --port 4000`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Access log     │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /questions  /questions/{id}/answers  .../vote      │
    │  /answer/{id}/vote  /  /health                      │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→400 │ NotFound→404 │ DB→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate settings, open the Database handle
    Shutdown: dispose the Database handle (close every pooled connection)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qaforum import __version__
from qaforum.config import settings
from qaforum.database import Database
from qaforum.exceptions import (
    INVALID_REQUEST_MESSAGE,
    INVALID_VOTE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    DatabaseError,
    NotFoundError,
    QAForumError,
    ValidationError,
)
from qaforum.middleware.logging import RequestLoggingMiddleware
from qaforum.middleware.request_id import RequestIDMiddleware, request_id_var
from qaforum.routes import answers, health, questions, votes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure root logging once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate settings (errors are logged; /health reports the outcome)
        3. Open the Database handle unless one was injected via create_app()
    Shutdown:
        1. Dispose the Database handle
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Q&A Forum Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if getattr(app.state, "database", None) is None:
        app.state.database = Database.from_settings(settings)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Q&A Forum Backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def validation_message(request: Request, exc: RequestValidationError) -> str:
    """
    Pick the 400 message for a failed schema validation.

    Body errors on a vote route are vote errors; everything else (including a
    non-numeric path id) is generic invalid request data.
    """
    on_vote_route = request.url.path.rstrip("/").endswith("/vote")
    body_only = all(tuple(err.get("loc", ()))[:1] == ("body",) for err in exc.errors())
    if on_vote_route and body_only:
        return INVALID_VOTE_MESSAGE
    return INVALID_REQUEST_MESSAGE


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses. Every error body is
    `{"message": ...}`.

        RequestValidationError → 400
        ValidationError        → 400
        NotFoundError          → 404
        DatabaseError          → 500 (operation message; driver detail logged)
        QAForumError (base)    → 500
        Exception (fallback)   → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] Request validation failed on %s %s: %s",
            rid, request.method, request.url.path, exc.errors(),
        )
        return JSONResponse(
            status_code=400,
            content={"message": validation_message(request, exc)},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(QAForumError)
    async def handle_app_error(request: Request, exc: QAForumError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": UNEXPECTED_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: An already-open Database handle. When omitted, the lifespan
                  opens one from settings at startup.
    """
    app = FastAPI(
        title="Q&A Platform API",
        description="A RESTful API for a Q&A platform: questions, answers and votes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(votes.router)

    return app


# uvicorn expects `qaforum.main:app` to be importable
app = create_app()
