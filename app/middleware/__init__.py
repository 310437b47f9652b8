"""
Middleware modules for the admin API.

Provides request processing middleware for:
- Correlation ID tracking for log correlation
- Cache-Control headers (admin data is always dynamic)
"""

from .correlation import CorrelationIdMiddleware, CorrelationLogFilter, correlation_id_ctx, request_id_ctx
from .cache_headers import CacheHeadersMiddleware

__all__ = [
    "CorrelationIdMiddleware",
    "CorrelationLogFilter",
    "correlation_id_ctx",
    "request_id_ctx",
    "CacheHeadersMiddleware",
]
