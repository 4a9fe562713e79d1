# backend/api/contracts/api_paths.py
"""
backend.api.contracts.api_paths

Purpose:
    Central definition of API route paths and versioning.
    Keeps routing stable and prevents string duplication.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ApiPaths:
    v1_prefix: str = "/v1"
    health: str = "/health"
    info: str = "/info"

    quotes_prefix: str = "/quotes"
    submit_request: str = "/request"
    get_request: str = "/request/{request_id}"
    get_result: str = "/result/{request_id}"
    list_requests: str = "/requests"
    list_results: str = "/results"
