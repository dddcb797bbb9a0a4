"""
jia-file HTTP server.

Run with:
    jia-file
or:
    uvicorn portal.run:create_app --factory
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exception_handlers import http_exception_handler

from jiafile import __version__
from jiafile import Config
from jiafile.Config import ConfigManager
from jiafile.FileSystemGate import FileSystemGate, RootConfigurationError
from jiafile.shared.gate import GateLogger

from portal import lifecycle
from portal.api import files as files_api
from portal.api import health as health_api
from portal.api.response import ResponseCode, envelope
from portal.middleware import (
    PathValidationMiddleware,
    RecoveryMiddleware,
    RequestLoggingMiddleware,
)

_log = GateLogger.get("Server")


def create_app(
    manager: Optional[ConfigManager] = None,
    file_gate: Optional[FileSystemGate] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        manager: Configuration (default: the global ConfigManager)
        file_gate: Gate to serve (default: built from the configuration)

    Raises:
        RootConfigurationError: ROOT_PATH is set but unusable
    """
    manager = manager or Config.get_manager()
    if file_gate is None:
        file_gate = FileSystemGate(manager.filesystem_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await lifecycle.startup(manager, file_gate)
        yield
        await lifecycle.shutdown()

    app = FastAPI(title="jia-file", version=__version__, lifespan=lifespan)
    app.state.config = manager
    app.state.file_gate = file_gate

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request, exc):
        if exc.status_code == 405:
            return envelope(ResponseCode.METHOD_NOT_ALLOWED, "Method not allowed")
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request, exc):
        _log.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return envelope(ResponseCode.PARAM_MISSING, "Invalid request body")

    app.include_router(files_api.create_router(file_gate, manager.get("MAX_FILE_SIZE")))
    app.include_router(health_api.create_router(file_gate))

    # Last added runs first: logging -> recovery -> CORS -> path guard
    app.add_middleware(PathValidationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=manager.get("ALLOWED_ORIGINS", ["*"]),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    return app


def main():
    """Load configuration, build the app and serve it."""
    manager = Config.get_manager()

    is_valid, errors = manager.validate()
    if not is_valid:
        for error in errors:
            _log.error(error)
        sys.exit(1)

    try:
        app = create_app(manager)
    except RootConfigurationError as e:
        _log.error(f"Cannot start: {e}")
        sys.exit(1)

    host = manager.get("HOST", "0.0.0.0")
    port = manager.get("PORT", 8190)
    _log.info(f"Server starting on {host}:{port}...")
    uvicorn.run(app, host=host, port=port, log_level=manager.get("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
