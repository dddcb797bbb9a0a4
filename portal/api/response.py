"""
Response envelope for the file API.

Every file endpoint answers HTTP 200 with {code, message, data};
code 0 is success, anything else is a failure category.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from jiafile.FileSystemGate import ErrorKind, OperationResult


class ResponseCode(IntEnum):
    SUCCESS = 0
    PARAM_MISSING = 1001
    METHOD_NOT_ALLOWED = 1002
    PATH_NOT_EXIST = 1003
    OPERATION_FAIL = 1004


ERROR_KIND_CODES = {
    ErrorKind.INVALID_ARGUMENT: ResponseCode.PARAM_MISSING,
    ErrorKind.NOT_FOUND: ResponseCode.PATH_NOT_EXIST,
    ErrorKind.OUTSIDE_ROOT: ResponseCode.OPERATION_FAIL,
    ErrorKind.ALREADY_EXISTS: ResponseCode.OPERATION_FAIL,
    ErrorKind.IO_ERROR: ResponseCode.OPERATION_FAIL,
}


class Envelope(BaseModel):
    """Uniform response body."""
    code: int
    message: str
    data: Any = None


def envelope(code: ResponseCode, message: str, data: Any = None) -> JSONResponse:
    body = Envelope(code=int(code), message=message, data=data)
    return JSONResponse(content=body.model_dump(mode="json"))


def code_for(kind: Optional[ErrorKind]) -> ResponseCode:
    if kind is None:
        return ResponseCode.OPERATION_FAIL
    return ERROR_KIND_CODES.get(kind, ResponseCode.OPERATION_FAIL)


def from_result(result: OperationResult, message: str, data: Any = None) -> JSONResponse:
    """Envelope for a gate result: the success message, or the mapped failure."""
    if not result.success:
        return envelope(code_for(result.error_kind), result.error or "Operation failed")
    return envelope(ResponseCode.SUCCESS, message, data)


def missing_parameter(*names: str) -> JSONResponse:
    return envelope(
        ResponseCode.PARAM_MISSING,
        f"Missing {' or '.join(names)} parameter",
    )


__all__ = [
    "ResponseCode",
    "ERROR_KIND_CODES",
    "Envelope",
    "envelope",
    "code_for",
    "from_result",
    "missing_parameter",
]
