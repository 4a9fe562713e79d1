"""
backend.api.logging.logging_config

Purpose:
    Central logging configuration for backend API.
    Ensures request_id is present in logs (including uvicorn.access and uvicorn.error),
    and that the engine's consumer/processor threads log through the same handler.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import logging

from backend.api.logging.request_context import RequestIdFilter


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | request_id=%(request_id)s | %(threadName)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    return handler


def _configure_logger(logger_name: str, handler: logging.Handler, level: int, *, clear_handlers: bool) -> None:
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if clear_handlers:
        logger.handlers.clear()

    logger.addHandler(handler)
    logger.propagate = False


def configure_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = _make_handler(level)

    # Root/app logs (don’t clear root handlers to avoid surprising other libs)
    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)

    # Uvicorn uses these loggers; clear their handlers so our formatter/filter wins.
    _configure_logger("uvicorn", handler, level, clear_handlers=True)
    _configure_logger("uvicorn.error", handler, level, clear_handlers=True)
    _configure_logger("uvicorn.access", handler, level, clear_handlers=True)
