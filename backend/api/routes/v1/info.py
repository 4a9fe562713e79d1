"""
backend.api.routes.v1.info

Purpose:
    Versioned info endpoint that exposes API metadata, endpoints and the broker
    channels this instance is wired to, for client discovery.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

_paths = ApiPaths()

router = APIRouter(tags=[ApiTags().info])


@router.get(_paths.info)
def info(request: Request) -> dict:
    service = request.app.state.correlation
    base = f"{_paths.v1_prefix}{_paths.quotes_prefix}"
    # Keep this as stable contract; safe for clients to depend on.
    return {
        "api_version": "v1",
        "service": "quote-correlation",
        "endpoints": {
            "submit": f"{base}{_paths.submit_request}",
            "request": f"{base}{_paths.get_request}",
            "result": f"{base}{_paths.get_result}",
            "health": f"{_paths.v1_prefix}{_paths.health}",
        },
        "channels": {
            "requests": service.channels.requests,
            "results": service.channels.results,
        },
    }
