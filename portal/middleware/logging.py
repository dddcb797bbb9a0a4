from __future__ import annotations

import time

from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from jiafile.shared.gate import GateLogger

_log = GateLogger.get("HTTP")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, URL, client and duration of every request."""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client = f"{request.client.host}:{request.client.port}" if request.client else "-"
        _log.info(
            f"{request.method} {request.url.path}"
            f"{'?' + request.url.query if request.url.query else ''} "
            f"{client} {response.status_code} {elapsed_ms:.1f}ms"
        )
        return response


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Turn unhandled exceptions into a logged 500 response."""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            _log.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
            return PlainTextResponse("Internal Server Error", status_code=500)


__all__ = ["RequestLoggingMiddleware", "RecoveryMiddleware"]
