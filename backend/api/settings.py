# backend/api/settings.py
"""
backend.api.settings

Purpose:
    Centralized configuration for the FastAPI service.
    Values default to a single-process setup (memory broker + inline processor) and
    can be overridden with QUOTES_* environment variables.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-02-21
"""

from __future__ import annotations

import os
from typing import Literal, Mapping

from pydantic import BaseModel, Field

from quote_processor.contracts.channels import ChannelNames

_channels = ChannelNames()


class Settings(BaseModel):
    service_name: str = Field(default="quote-correlation-api")
    service_version: str = Field(default="0.1.0")

    broker_backend: Literal["memory", "redis"] = Field(default="memory")
    redis_url: str = Field(default="redis://localhost:6379/0")
    request_channel: str = Field(default=_channels.requests)
    result_channel: str = Field(default=_channels.results)
    consumer_poll_s: float = Field(default=0.5, gt=0)

    registry_shards: int = Field(default=16, ge=1)

    log_level: str = Field(default="INFO")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # None -> on for the memory backend, off for redis (a separate worker runs there).
    inline_processor: bool | None = Field(default=None)

    @property
    def run_inline_processor(self) -> bool:
        if self.inline_processor is None:
            return self.broker_backend == "memory"
        return self.inline_processor


def get_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    overrides: dict[str, object] = {}
    env_fields = {
        "QUOTES_BROKER_BACKEND": "broker_backend",
        "QUOTES_REDIS_URL": "redis_url",
        "QUOTES_REQUEST_CHANNEL": "request_channel",
        "QUOTES_RESULT_CHANNEL": "result_channel",
        "QUOTES_REGISTRY_SHARDS": "registry_shards",
        "QUOTES_CONSUMER_POLL_S": "consumer_poll_s",
        "QUOTES_LOG_LEVEL": "log_level",
        "QUOTES_HOST": "host",
        "QUOTES_PORT": "port",
        "QUOTES_INLINE_PROCESSOR": "inline_processor",
    }
    for env_key, field in env_fields.items():
        raw = env.get(env_key)
        if raw is not None and raw.strip():
            overrides[field] = raw.strip()

    # Pydantic coerces numeric and boolean strings and rejects invalid values.
    return Settings(**overrides)
