"""Middleware exports."""

from .logging import RequestLogMiddleware, log_debug, log_error, log_info, log_warning

__all__ = [
    "RequestLogMiddleware",
    "log_debug",
    "log_info",
    "log_warning",
    "log_error",
]
