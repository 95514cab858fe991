# This file defines request ("run") payloads: creation, partial update and the
# denormalized row returned by every request endpoint.

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import AliasChoices, Field

from src.api.schemas.common import CamelModel, EnvelopeFields, ListEnvelopeFields

Priority = Literal["low", "medium", "high"]


class RequestCreateV1(CamelModel):
    """Creation payload.

    Required fields are checked by the service so that every missing name can be
    reported at once; the branch normally comes from the caller's token.
    """

    branch_id: int | None = None
    branch_name: str | None = None
    service_type_id: int | None = None
    pickup_location: str | None = None
    delivery_location: str | None = None
    pickup_date: datetime | None = None
    description: str | None = None
    priority: Priority | None = None
    my_status: int | None = Field(default=None, ge=0)
    price: Decimal | None = Field(default=None, ge=0)
    latitude: float | None = None
    longitude: float | None = None


class RequestPatchV1(CamelModel):
    """Partial update payload; only keys present in the body are written."""

    branch_name: str | None = None
    service_type_id: int | None = None
    pickup_location: str | None = None
    delivery_location: str | None = None
    pickup_date: datetime | None = None
    description: str | None = None
    priority: Priority | None = None
    status: str | None = Field(default=None, max_length=32)
    my_status: int | None = Field(default=None, ge=0)
    team_id: int | None = Field(default=None, validation_alias=AliasChoices("teamId", "team_id"))
    latitude: float | None = None
    longitude: float | None = None


class RequestRowV1(CamelModel):
    id: int
    branch_id: int
    branch_name: str | None = None
    client_name: str | None = None
    service_type_id: int | None = None
    service_type_name: str | None = None
    pickup_location: str | None = None
    delivery_location: str | None = None
    pickup_date: datetime | None = None
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    my_status: int | None = None
    team_id: int | None = None
    staff_id: int | None = None
    price: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RequestListResponseV1(ListEnvelopeFields):
    data: list[RequestRowV1]


class RequestResponseV1(EnvelopeFields):
    data: RequestRowV1
