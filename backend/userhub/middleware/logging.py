"""
UserHub Backend - Request Logging Middleware
=============================================

What:  One access log line per HTTP request on the `userhub.access` logger.
How:   Times the downstream app, then reads the matched route from the
       request scope so each line names the user operation and, where the
       path carries one, the user id:

    GET /users/3f2c… 404 1.8ms [a1b2c3d4] get_user user=3f2c…

Level follows the status class: 5xx → ERROR, 4xx → WARNING, else INFO.
The same values are attached to the record as `extra` fields (request_id,
method, path, status, duration_ms, operation, user_id).

Request bodies are never logged (they carry personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("userhub.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, tagged with the user operation it hit."""

    # Probed every few seconds by load balancers
    SKIPPED_PATHS = {"/health", "/favicon.ico"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        # Filled in by the router once a route matched
        route = request.scope.get("route")
        operation = getattr(route, "name", None) or "unmatched"
        user_id = request.scope.get("path_params", {}).get("user_id")
        rid = getattr(request.state, "request_id", "")

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] %s%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            rid,
            operation,
            f" user={user_id}" if user_id else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": duration_ms,
                "operation": operation,
                "user_id": user_id,
            },
        )
        return response
