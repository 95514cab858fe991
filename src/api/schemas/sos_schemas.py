# This file defines SOS alert payloads and rows.

from __future__ import annotations

from datetime import datetime

from src.api.schemas.common import CamelModel, EnvelopeFields, ListEnvelopeFields


class SosStatusUpdateV1(CamelModel):
    status: str | None = None
    comment: str | None = None


class SosRowV1(CamelModel):
    id: int
    guard_id: int | None = None
    guard_name: str | None = None
    status: str | None = None
    comment: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None


class SosListResponseV1(ListEnvelopeFields):
    data: list[SosRowV1]


class SosResponseV1(EnvelopeFields):
    data: SosRowV1
