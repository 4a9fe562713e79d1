"""
backend.api.contracts.request_id_policy

Purpose:
    Central policy for HTTP request/trace IDs (header names + response behavior).
    Unrelated to the quote correlation id (`requestId` in quote payloads), which is
    minted by the submission stage and travels through the broker.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestIdPolicy:
    request_id_header: str = "X-Request-Id"
    correlation_id_header: str = "X-Correlation-Id"
    response_header: str = "X-Request-Id"
