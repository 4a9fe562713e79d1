"""
quote_processor.contracts.channels

Purpose:
    Central definition of broker channel names shared by the API and the processor.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelNames:
    requests: str = "quote-requests"
    results: str = "quotes"
