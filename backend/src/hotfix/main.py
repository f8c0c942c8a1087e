"""HotfixAI Sync Backend - Main FastAPI Application

Remote file-tree synchronization for the HotfixAI site editor.

This module creates and configures the FastAPI application, including:
- Remote sync router (fetch / publish over FTP and SFTP)
- Middleware (request ID correlation, CORS)
- Exception handlers mapping sync errors to {ok, error} bodies
- Health and metrics endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .domain.remote import InputError, RemoteSyncError
from .observability import RequestIDMiddleware, configure_logging
from .observability.router import router as observability_router
from .remote_sync import router as remote_sync_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info("HotfixAI sync API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"SFTP ports: {settings.SFTP_PORTS}, fail-fast publish: {settings.PUBLISH_FAIL_FAST}")

    yield

    logger.info("HotfixAI sync API shutting down...")


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies as client errors."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "ok": False,
            "error": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


async def input_error_handler(request: Request, exc: InputError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "error": str(exc)},
    )


async def remote_sync_error_handler(request: Request, exc: RemoteSyncError) -> JSONResponse:
    """Connection, listing and aborted-publish failures.

    The underlying message is passed through so the user can tell a wrong
    password from an unreachable host.
    """
    logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": str(exc)},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: full details are logged but not exposed to the client."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "ok": False,
            "error": "An unexpected error occurred. Please try again later.",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input (it may hold a password)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app() -> FastAPI:
    """Build the FastAPI application from current settings."""
    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    show_docs = settings.ENVIRONMENT != "production"
    application = FastAPI(
        title="HotfixAI Sync API",
        description="Remote FTP/SFTP file-tree synchronization for the HotfixAI editor",
        version="0.1.0",
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
        lifespan=lifespan,
    )

    # Request ID Middleware (must be first for proper correlation)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(InputError, input_error_handler)
    application.add_exception_handler(RemoteSyncError, remote_sync_error_handler)
    application.add_exception_handler(Exception, generic_exception_handler)

    application.include_router(observability_router)
    application.include_router(remote_sync_router, prefix="/api")

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        return {
            "name": "HotfixAI Sync API",
            "version": "0.1.0",
            "status": "running",
            "docs": "/docs" if show_docs else None,
        }

    return application


app = create_app()


# =============================================================================
# DEVELOPMENT SERVER
# =============================================================================

if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "hotfix.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=get_settings().ENVIRONMENT == "development",
        log_level=get_settings().LOG_LEVEL.lower(),
    )
