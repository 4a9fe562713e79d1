"""
backend.api.routes.v1.health

Purpose:
    Versioned health endpoint for API clients.
    Reports whether the background consumer threads are running.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

router = APIRouter(tags=[ApiTags().health])


@router.get(ApiPaths().health)
def health(request: Request) -> dict:
    service = request.app.state.correlation
    return {"status": "ok", "consumers_running": service.running}
