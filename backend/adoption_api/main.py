"""
Pet Adoption API — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires the record store, the service
       objects, middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn adoption_api.main:app`) and the test suite
       (`create_app(store=...)` around a SQLite store).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routes:                                             │
    │  /api/pets  /api/applications  /api/medical-records  │
    │  /  /health                                          │
    │                                                      │
    │  Exception Handlers:                                 │
    │  PetAdoptionError → declared status code             │
    │  RequestValidationError → 400                        │
    │  unmatched route → 404   anything else → 500         │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration
    Shutdown: dispose the record store's connection pool
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from adoption_api import __version__
from adoption_api.config import Settings, settings as default_settings
from adoption_api.database import build_engine
from adoption_api.dependencies import build_services
from adoption_api.exceptions import PetAdoptionError, ValidationError
from adoption_api.middleware.logging import RequestLoggingMiddleware
from adoption_api.middleware.request_id import RequestIDMiddleware, request_id_var
from adoption_api.routes import applications, health, medical_records, pets
from adoption_api.store import RecordStore

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of every validation error path
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    config = config or default_settings

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that emit a line per operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config)
    logger.info("Pet Adoption API %s starting up (environment=%s)", __version__, config.environment)

    try:
        config.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health reports store problems, and the log says why
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Pet Adoption API shutting down...")
    await app.state.services.store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _validation_message(exc: RequestValidationError) -> str:
    """'Validation error: pet_id: <msg>, applicant_email: <msg>'"""
    parts = []
    for error in exc.errors():
        location = [str(segment) for segment in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES and len(location) > 1:
            location = location[1:]
        parts.append(f"{'.'.join(location)}: {error.get('msg', 'Invalid value')}")
    return "Validation error: " + ", ".join(parts)


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    """
    Map exceptions to the error envelope {"status", "message", "stack"?}.

    Handler hierarchy:
        PetAdoptionError        → exc.status_code (400 / 404 / 500)
        RequestValidationError  → 400 with field-qualified messages
        HTTPException (404)     → 404 "Not Found - <path>" (unmatched routes)
        Exception (fallback)    → 500 generic message, details logged only
    """

    def error_body(status: str, message: str, exc: BaseException) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": status, "message": message}
        if config.is_development:
            body["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return body

    @app.exception_handler(PetAdoptionError)
    async def handle_app_error(request: Request, exc: PetAdoptionError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("error", exc.message, exc),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(message=_validation_message(exc))
        logger.warning("[%s] %s", request_id_var.get(""), error.message)
        return JSONResponse(status_code=400, content=error_body("error", error.message, exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=error_body("not found", f"Not Found - {request.url.path}", exc),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("error", str(exc.detail), exc),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body("error", "Internal Server Error", exc),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    store: Optional[RecordStore] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Record store to serve from; built from DATABASE_URL when omitted
        config: Settings override (defaults to the environment-loaded singleton)

    Returns:
        Fully configured FastAPI instance. Services are constructed here,
        once, and shared by every request through app.state.
    """
    config = config or default_settings
    if store is None:
        store = RecordStore(build_engine(config=config), config=config)

    app = FastAPI(
        title="Pet Adoption API",
        description=(
            "Manage adoptable pets, adoption applications and medical records. "
            "Approving an application adopts the pet and can reject competing applications."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.services = build_services(store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Execution order is the reverse of registration:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, config)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(pets.router)
    app.include_router(applications.router)
    app.include_router(medical_records.router)

    return app


# uvicorn expects `adoption_api.main:app` to be importable
app = create_app()
