"""
Health endpoint.

Returns a static status document together with the configured project
name and version.  It does not touch the database, so it can be used
as a liveness probe.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_health(request: Request) -> Dict[str, Any]:
    """Return ``{"status": "ok"}`` with the project name and version."""
    settings = request.app.state.settings
    return {"status": "ok", "name": settings.project_name, "version": settings.api_version}
