"""Request context middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
binds it to a ContextVar so that any downstream code, including log records
emitted deep inside the pipelines, carries it without explicit parameter
passing. One access log line is written per request, including requests
whose handler raised.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.observability.logging_setup import request_id_var

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the lifetime of the request and log it.

    Priority:
    1. X-Request-ID header (explicit, e.g. from a proxy)
    2. Freshly generated UUID4 hex
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, 500, started, logging.ERROR)
            raise
        else:
            response.headers["X-Request-ID"] = request_id
            self._log_access(request, response.status_code, started)
            return response
        finally:
            request_id_var.reset(token)

    @staticmethod
    def _log_access(request: Request, status: int, started: float, level: int = logging.INFO) -> None:
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {status}",
            extra={
                "path": request.url.path,
                "status": status,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
