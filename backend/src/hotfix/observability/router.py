"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
The service keeps no database or cache, so health reflects the process and
its configuration only; remote hosts are never probed.
"""

from typing import Any, Dict

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..config import get_settings
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns liveness status and the active sync configuration",
)
def health_check() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "sync": {
            "sftp_ports": settings.SFTP_PORTS,
            "fetch_extensions": settings.FETCH_EXTENSIONS,
            "publish_fail_fast": settings.PUBLISH_FAIL_FAST,
        },
    }


@router.get(
    "/ready",
    summary="Readiness check endpoint",
)
def readiness_check() -> Dict[str, str]:
    return {
        "status": "ready",
        "message": "Application is ready to serve traffic"
    }
