from __future__ import annotations

from fastapi import APIRouter
from fastapi.requests import Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from jiafile.FileSystemGate import FileService, InvalidArgumentError, validate_request_path
from jiafile.shared.gate import GateLogger

from .response import (
    ResponseCode,
    envelope,
    from_result,
    missing_parameter,
)

_log = GateLogger.get("FilesAPI")


class CreateDocumentRequest(BaseModel):
    """Model for creating a document."""
    path: str = ""
    type: str = ""
    content: str = ""


def create_router(file_gate: FileService, max_file_size: int = 10 * 1024 * 1024) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    async def index():
        """Plain-text banner."""
        return "Welcome to jia-file!"

    @router.get("/list")
    def api_list(path: str = ""):
        """List directory contents."""
        if not path:
            return missing_parameter("path")

        result = file_gate.list(path)
        data = [f.to_dict() for f in result.data] if result.success else None
        return from_result(result, "success", data)

    @router.post("/mkdir")
    def api_mkdir(path: str = ""):
        """Create a directory and its parents."""
        if not path:
            return missing_parameter("path")

        result = file_gate.create_directory(path)
        return from_result(result, "Directory created successfully")

    @router.post("/touch")
    async def api_touch(request: Request, path: str = ""):
        """Create a file whose content is the raw request body."""
        if not path:
            return missing_parameter("path")

        content = await request.body()
        if len(content) > max_file_size:
            return envelope(
                ResponseCode.OPERATION_FAIL,
                f"Content size ({len(content)} bytes) exceeds limit ({max_file_size} bytes)",
            )

        result = await run_in_threadpool(file_gate.create_file, path, content)
        return from_result(result, "File created successfully")

    @router.delete("/delete")
    def api_delete(path: str = ""):
        """Delete a file or directory tree."""
        if not path:
            return missing_parameter("path")

        result = file_gate.delete(path)
        return from_result(result, "File or directory deleted successfully")

    @router.post("/move")
    def api_move(src: str = "", dst: str = ""):
        """Move a file or directory."""
        if not src or not dst:
            return missing_parameter("src", "dst")

        result = file_gate.move(src, dst)
        return from_result(result, "File or directory moved successfully")

    @router.post("/copy")
    def api_copy(src: str = "", dst: str = ""):
        """Copy a single file."""
        if not src or not dst:
            return missing_parameter("src", "dst")

        result = file_gate.copy(src, dst)
        return from_result(result, "File or directory copied successfully")

    @router.get("/info")
    def api_info(path: str = ""):
        """Get file or directory information."""
        if not path:
            return missing_parameter("path")

        result = file_gate.get_info(path)
        data = result.data.to_dict() if result.success else None
        return from_result(result, "success", data)

    @router.post("/document")
    def api_document(data: CreateDocumentRequest):
        """Create a document; the extension is completed from its type."""
        if not data.path or not data.type:
            return envelope(ResponseCode.PARAM_MISSING, "Path and type are required")

        try:
            validate_request_path(data.path)
        except InvalidArgumentError as e:
            _log.warning(f"Rejected document path {data.path!r}: {e}")
            return envelope(ResponseCode.PARAM_MISSING, str(e))

        result = file_gate.create_document(data.path, data.type, data.content)
        return from_result(result, "Document created successfully")

    return router


__all__ = ["create_router", "CreateDocumentRequest"]
