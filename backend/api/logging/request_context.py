"""
backend.api.logging.request_context

Purpose:
    HTTP trace id propagation into logs.
      - request_id_ctx_var: set by RequestIdMiddleware for the duration of a request
      - RequestIdFilter: stamps every record with the current trace id

    Records emitted outside an HTTP request (result consumer, inline processor
    threads) get "-"; those carry the quote correlation id in the message instead.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-02-21
"""

from __future__ import annotations

import contextvars
import logging

request_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id",
    default=None,
)


def current_request_id(default: str = "-") -> str:
    return request_id_ctx_var.get() or default


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True
