"""
backend.api.routes.v1.quotes

Purpose:
    FastAPI routes for the asynchronous quote flow:
      POST /v1/quotes/request               submit, returns {"requestId": ...} immediately
      GET  /v1/quotes/request/{request_id}  the submitted request
      GET  /v1/quotes/result/{request_id}   the quote, once the processor has answered
      GET  /v1/quotes/requests | /results   debug snapshots

Notes:
    - Handlers are thin: all state lives in the CorrelationService on app.state.
    - A quote that has not arrived yet is a 404; polling is the client's job.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags
from backend.api.contracts.error_contract import ErrorResponse
from backend.api.errors import not_found
from backend.api.schemas.quotes import (
    QuoteOut,
    QuoteRequestOut,
    SubmitQuoteRequest,
    SubmitQuoteResponse,
)
from backend.correlation.service import CorrelationService

logger = logging.getLogger(__name__)

_paths = ApiPaths()
_tags = ApiTags()

router = APIRouter(prefix=_paths.quotes_prefix, tags=[_tags.quotes])

_not_found_response = {404: {"model": ErrorResponse, "description": "Unknown or unresolved correlation id"}}


def _service(request: Request) -> CorrelationService:
    return request.app.state.correlation


@router.post(
    _paths.submit_request,
    response_model=SubmitQuoteResponse,
    summary="Submit a quote request",
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
)
def submit_quote_request(body: SubmitQuoteRequest, request: Request) -> SubmitQuoteResponse:
    logger.info("Quote request received: subject=%r", body.subject)
    correlation_id = _service(request).submit(body.subject)
    return SubmitQuoteResponse(request_id=str(correlation_id))


@router.get(_paths.get_request, response_model=QuoteRequestOut, responses=_not_found_response)
def get_quote_request(request_id: UUID, request: Request) -> dict:
    quote_request = _service(request).lookup_request(request_id)
    if quote_request is None:
        raise not_found(f"Quote request not found: {request_id}", requestId=str(request_id))
    return quote_request.to_wire()


@router.get(_paths.get_result, response_model=QuoteOut, responses=_not_found_response)
def get_quote_result(request_id: UUID, request: Request) -> dict:
    quote = _service(request).lookup_result(request_id)
    if quote is None:
        raise not_found(f"Quote result not found: {request_id}", requestId=str(request_id))
    return quote.to_wire()


@router.get(_paths.list_requests, response_model=dict[str, QuoteRequestOut], summary="All requests (debug)")
def list_quote_requests(request: Request) -> dict:
    return {str(k): v.to_wire() for k, v in _service(request).list_requests()}


@router.get(_paths.list_results, response_model=dict[str, QuoteOut], summary="All quotes (debug)")
def list_quote_results(request: Request) -> dict:
    return {str(k): v.to_wire() for k, v in _service(request).list_results()}
