"""
backend.api.routes.health

Purpose:
    Unversioned liveness endpoint for container/orchestrator checks.
    Deliberately independent of broker state so a broker outage does not restart the API.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from fastapi import APIRouter

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

_paths = ApiPaths()
_tags = ApiTags()

router = APIRouter(tags=[_tags.health])


@router.get(_paths.health)
def liveness() -> dict:
    return {"ok": True}
