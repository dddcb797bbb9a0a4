"""
Health check API endpoint.

Reports FileSystemGate health: the confinement root is still an
accessible directory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Response

from jiafile.FileSystemGate import FileSystemGate


def create_router(file_gate: FileSystemGate) -> APIRouter:
    router = APIRouter()

    @router.get("/api/health")
    def api_health(response: Response) -> Dict[str, Any]:
        """
        Get health status.

        Returns 200 when healthy, 503 when unhealthy.
        """
        status = file_gate.get_health_status()

        if not status.get("healthy", False):
            response.status_code = 503

        return {
            "healthy": status.get("healthy", False),
            "gates": {"FileSystemGate": status},
        }

    return router


__all__ = ["create_router"]
