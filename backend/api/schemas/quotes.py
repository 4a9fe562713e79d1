"""
backend.api.schemas.quotes

Purpose:
    Request/response schemas for the /v1/quotes endpoints.

Notes:
    - extra="forbid" prevents silent client typos (e.g., "subjet").
    - Response shapes mirror the broker wire format so clients see exactly what
      travelled through the request/result channels.
    - `requestId` is the quote correlation id, not the HTTP X-Request-Id header.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_SUBJECT_LENGTH = 200


class SubmitQuoteRequest(BaseModel):
    """
    Request payload for POST /v1/quotes/request.
    """

    model_config = ConfigDict(extra="forbid")

    subject: str = Field(
        ...,
        description="What to quote (free-form; 1-200 chars after trimming).",
        examples=["Widget"],
    )

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Subject must not be blank.")
        if len(v) > MAX_SUBJECT_LENGTH:
            raise ValueError(f"Subject must be at most {MAX_SUBJECT_LENGTH} characters.")
        return v


class SubmitQuoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    request_id: str = Field(..., alias="requestId", description="Correlation id to poll with")


class QuoteRequestOut(BaseModel):
    id: str
    subject: str


class QuoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    request_id: str = Field(..., alias="requestId")
    subject: str
    value: str = Field(..., description="Decimal string with two fractional digits", examples=["123.46"])
    timestamp: str = Field(..., description="ISO-8601 UTC creation time")
