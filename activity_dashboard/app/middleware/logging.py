from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..metrics import POLLER_REQUESTS, REQUEST_COUNT, REQUEST_ERRORS, REQUEST_LATENCY
from ..services.loader import POLLER_HEADER


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log and request metrics.

    Snapshot reads issued by the dashboard's own poller carry ``POLLER_HEADER``.
    They repeat every few seconds, so they are logged at DEBUG and counted in
    ``POLLER_REQUESTS`` only, leaving the request metrics to real clients.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self._logger = logging.getLogger("activity_dashboard.request")
        if self._logger.level == logging.NOTSET:
            self._logger.setLevel(logging.INFO)

    async def dispatch(  # type: ignore[override]
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        from_poller = POLLER_HEADER in request.headers

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, request_id, 500, started, from_poller, failed=True)
            raise

        self._record(request, request_id, response.status_code, started, from_poller)
        response.headers["X-Request-ID"] = request_id
        return response

    def _record(
        self,
        request: Request,
        request_id: str,
        status: int,
        started: float,
        from_poller: bool,
        *,
        failed: bool = False,
    ) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        path = _route_path(request)
        extra = {
            "request_id": request_id,
            "path": path,
            "method": request.method,
            "status": status,
            "duration_ms": round(duration_ms, 3),
        }

        if from_poller:
            POLLER_REQUESTS.labels(status=str(status)).inc()
            level = logging.ERROR if failed else logging.DEBUG
            self._logger.log(level, "poller read", extra=extra, exc_info=failed)
            return

        REQUEST_COUNT.labels(method=request.method, path=path, status=str(status)).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(duration_ms / 1000)
        if status >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path, status=str(status)).inc()

        if failed:
            self._logger.error("request error", extra=extra, exc_info=True)
        else:
            self._logger.info("request complete", extra=extra)


def _route_path(request: Request) -> str:
    # Route templates keep metric label cardinality bounded.
    route = request.scope.get("route")
    return str(getattr(route, "path", request.url.path))
