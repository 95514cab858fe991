# This file defines schema pieces shared by every endpoint.
# Envelope and error payloads stay consistent across routers, and domain models
# serialize to camelCase JSON through CamelModel.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for domain payloads exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EnvelopeFields(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    generated_at: datetime
    warnings: list[str] | None = None


class ListEnvelopeFields(EnvelopeFields):
    count: int


class MessageV1(BaseModel):
    message: str


class MessageResponseV1(EnvelopeFields):
    data: MessageV1


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime
