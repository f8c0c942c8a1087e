"""Observability module for the sync backend.

Provides structured logging, request correlation, and Prometheus metrics.
"""

from .logging_config import (
    configure_logging,
    generate_request_id,
    get_logger,
    get_request_id,
    request_id_var,
    set_request_id,
)
from .metrics import (
    remote_files_total,
    remote_operation_duration_seconds,
    remote_operations_total,
)
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Metrics
    "remote_operations_total",
    "remote_operation_duration_seconds",
    "remote_files_total",
    # Middleware
    "RequestIDMiddleware",
]
