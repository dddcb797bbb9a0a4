from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from jiafile.FileSystemGate import InvalidArgumentError, validate_request_path
from jiafile.shared.gate import GateLogger

from portal.api.response import ResponseCode, envelope

_log = GateLogger.get("PathGuard")


class PathValidationMiddleware(BaseHTTPMiddleware):
    """Reject path-shaped query parameters that are relative or contain '..'."""

    # Query parameters that carry filesystem paths
    PATH_PARAMS = ("path", "src", "dst")

    async def dispatch(self, request, call_next):
        for name in self.PATH_PARAMS:
            value = request.query_params.get(name)
            if not value:
                continue
            try:
                validate_request_path(value)
            except InvalidArgumentError as e:
                _log.warning(f"Rejected {name}={value!r} on {request.url.path}: {e}")
                return envelope(ResponseCode.PARAM_MISSING, str(e))

        return await call_next(request)


__all__ = ["PathValidationMiddleware"]
