"""
Pet Adoption API — Request Logging Middleware
==============================================

What:  One access-log line per HTTP request.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Line format:
    POST /api/applications/{application_id}/approve 200 12.4ms [a1b2c3d4]

    The route template is logged rather than the raw path, so every
    approve call groups under one key; the concrete path travels in
    `extra` for lookups by id.

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged (applications carry applicant contact data).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from adoption_api.middleware.request_id import request_id_var

logger = logging.getLogger("adoption_api.access")

# Monitoring probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})

_LEVEL_BY_STATUS_CLASS = {5: logging.ERROR, 4: logging.WARNING}


def _route_template(request: Request) -> Optional[str]:
    route = request.scope.get("route")
    return getattr(route, "path", None)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by route template, with request ID correlation."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        path = request.url.path
        # Unmatched routes have no template; fall back to the raw path
        route = _route_template(request) or path
        rid = request_id_var.get("")

        logger.log(
            _LEVEL_BY_STATUS_CLASS.get(status // 100, logging.INFO),
            "%s %s %d %.1fms [%s]",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "route": route,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
