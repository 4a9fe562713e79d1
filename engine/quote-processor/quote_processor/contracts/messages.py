"""
quote_processor.contracts.messages

Purpose:
    Wire contracts for the two broker channels:
      - QuoteRequest  (request channel, emitted by the API, consumed by the processor)
      - Quote         (result channel, emitted by the processor, consumed by the API)

Design Notes:
    - Models are frozen; a request or quote is never mutated after creation.
    - `value` travels as a decimal string so no float precision is lost on the wire.
    - `timestamp` travels as ISO-8601 UTC with a trailing "Z".
    - Unknown fields on inbound messages are ignored (forward compatibility).
    - Decoding failures of any kind surface as MalformedMessageError.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from quote_processor.ids import new_correlation_id


class MalformedMessageError(ValueError):
    """Raised when an inbound broker message cannot be decoded into a contract model."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class QuoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID = Field(..., description="Correlation identifier minted at submission")
    subject: str = Field(..., description="Free-form description of what is being quoted")

    @classmethod
    def create(cls, subject: str) -> "QuoteRequest":
        return cls(id=new_correlation_id(), subject=subject)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: UUID = Field(..., description="Own identifier of this quote")
    request_id: UUID = Field(..., alias="requestId", description="Back-reference to the QuoteRequest id")
    subject: str
    value: Decimal
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("value")
    def _serialize_value(self, v: Decimal) -> str:
        return str(v)

    @field_serializer("timestamp")
    def _serialize_timestamp(self, v: datetime) -> str:
        return format_timestamp(v)

    @classmethod
    def from_request(cls, request: QuoteRequest, value: Decimal) -> "Quote":
        """
        Build the quote answering `request`.

        The quote gets a fresh own id; `request_id` carries the request's
        correlation id and the subject is copied rather than re-fetched.
        """
        return cls(
            id=new_correlation_id(),
            request_id=request.id,
            subject=request.subject,
            value=value,
            timestamp=utc_now(),
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------

def _load_object(body: str | bytes) -> dict[str, Any]:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedMessageError(f"message is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedMessageError("message must be a JSON object")
    return payload


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc or '<root>'}: {err.get('msg')}")
    return "; ".join(parts)


def encode_request(request: QuoteRequest) -> str:
    return json.dumps(request.to_wire(), separators=(",", ":"))


def decode_request(body: str | bytes) -> QuoteRequest:
    payload = _load_object(body)
    try:
        return QuoteRequest.model_validate(payload)
    except ValidationError as exc:
        raise MalformedMessageError(f"invalid quote request: {_describe(exc)}") from exc


def encode_quote(quote: Quote) -> str:
    return json.dumps(quote.to_wire(), separators=(",", ":"))


def decode_quote(body: str | bytes) -> Quote:
    payload = _load_object(body)
    try:
        return Quote.model_validate(payload)
    except ValidationError as exc:
        raise MalformedMessageError(f"invalid quote: {_describe(exc)}") from exc
