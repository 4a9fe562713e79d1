"""
backend.api.main

Purpose:
    FastAPI application entrypoint for the quote correlation API.
    Builds the CorrelationService (registries + broker + stages) once per app and
    runs its consumer threads for the lifetime of the app.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-02-21
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from backend.api.settings import Settings, get_settings
from backend.api.routes.health import router as health_router
from backend.api.routes.v1 import v1_router

from backend.api.middleware.request_id import RequestIdMiddleware
from backend.api.contracts.request_id_policy import RequestIdPolicy

from backend.api.logging.logging_config import configure_logging
from backend.api.error_handlers import register_error_handlers

from backend.correlation.service import CorrelationService
from quote_processor.broker import MessageBroker, create_broker
from quote_processor.contracts.channels import ChannelNames
from quote_processor.pricing import PricingFunction
from quote_processor.processor import QuoteProcessor


def build_service(
    settings: Settings,
    *,
    broker: MessageBroker | None = None,
    pricing: PricingFunction | None = None,
) -> CorrelationService:
    if broker is None:
        broker = create_broker(
            settings.broker_backend,
            redis_url=settings.redis_url,
            poll_timeout_s=settings.consumer_poll_s,
        )
    channels = ChannelNames(requests=settings.request_channel, results=settings.result_channel)

    inline_processor = None
    if settings.run_inline_processor:
        inline_processor = QuoteProcessor(broker, pricing=pricing, channels=channels)

    return CorrelationService(
        broker,
        channels=channels,
        registry_shards=settings.registry_shards,
        inline_processor=inline_processor,
    )


def create_app(
    settings: Settings | None = None,
    *,
    broker: MessageBroker | None = None,
    pricing: PricingFunction | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    configure_logging(settings.log_level)

    service = build_service(settings, broker=broker, pricing=pricing)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        service.start()
        try:
            yield
        finally:
            # Joining consumer threads blocks; keep it off the event loop.
            await run_in_threadpool(service.stop)
            service.broker.close()

    app = FastAPI(title=settings.service_name, version=settings.service_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.correlation = service

    @app.get("/")
    def root():
        return {"status": "ok", "service": "quote-correlation"}

    app.add_middleware(RequestIdMiddleware, policy=RequestIdPolicy())

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    run()
