"""
Cache-Control headers middleware.

Admin analytics and settings reflect live remote data, so they are never
cached. Only the static info endpoints get short public caching.
"""

import re
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable, List, Tuple


class CacheHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds Cache-Control headers based on endpoint patterns.

    Cache Strategies:
    - Info endpoints: short public caching
    - Admin and edge-function endpoints: always dynamic (no-store)
    - Write operations (POST/PUT/DELETE): no-store
    """

    # Format: (pattern, max_age_seconds)
    PUBLIC_CACHEABLE: List[Tuple[str, int]] = [
        (r"^/health$", 60),
        (r"^/$", 300),
        (r"^/ui/", 3600),  # static markup fragments
    ]

    NO_STORE: List[str] = [
        r"^/api/admin/",
        r"^/functions/",
    ]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        path = request.url.path

        if request.method not in ("GET", "HEAD", "OPTIONS"):
            response.headers["Cache-Control"] = "no-store"
            return response

        for pattern in self.NO_STORE:
            if re.match(pattern, path):
                response.headers["Cache-Control"] = "no-store"
                return response

        # Errors never get a cacheable header
        if response.status_code >= 400:
            return response

        for pattern, max_age in self.PUBLIC_CACHEABLE:
            if re.match(pattern, path):
                response.headers["Cache-Control"] = f"public, max-age={max_age}"
                return response

        if path.startswith("/api/"):
            response.headers["Cache-Control"] = "private, no-cache"

        return response
