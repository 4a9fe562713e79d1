"""
quote_processor.ids

Purpose:
    Correlation identifier generation (128-bit random UUIDs).
    Used for both the request correlation id and a quote's own id.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import uuid


def new_correlation_id() -> uuid.UUID:
    return uuid.uuid4()
