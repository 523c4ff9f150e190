"""Liveness and readiness probes.

Readiness requires the lifespan to have started and the workspace base
directory to be writable, since every generation reads and writes there.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Response
from pydantic import BaseModel

from codegen import __version__
from codegen.config import get_settings

router = APIRouter(tags=["health"])


class ProbeResponse(BaseModel):
    status: str
    timestamp: str
    instance_id: str
    version: str = __version__
    checks: dict[str, bool] | None = None


_started = False


def set_ready(ready: bool) -> None:
    """Flip the lifespan flag reported by /ready."""
    global _started
    _started = ready


def workspace_dir_writable(base_dir: str) -> bool:
    path = Path(base_dir)
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=ProbeResponse, summary="Liveness check")
async def health_check() -> ProbeResponse:
    return ProbeResponse(
        status="healthy",
        timestamp=_now(),
        instance_id=get_settings().full_instance_id,
    )


@router.get("/ready", response_model=ProbeResponse, summary="Readiness check")
async def readiness_check(response: Response) -> ProbeResponse:
    """503 until the app has started and workspaces can be written."""
    settings = get_settings()
    checks = {
        "started": _started,
        "workspace_dir_writable": workspace_dir_writable(settings.workspace_base_dir),
    }

    ready = all(checks.values())
    if not ready:
        response.status_code = 503

    return ProbeResponse(
        status="ready" if ready else "not_ready",
        timestamp=_now(),
        instance_id=settings.full_instance_id,
        checks=checks,
    )


@router.get("/", include_in_schema=False)
async def root() -> dict:
    return {"service": "playground-codegen", "version": __version__}
