# This file defines the service-type catalog schemas.

from __future__ import annotations

from src.api.schemas.common import CamelModel, EnvelopeFields, ListEnvelopeFields


class ServiceTypeV1(CamelModel):
    id: int
    name: str
    description: str | None = None


class ServiceTypeListResponseV1(ListEnvelopeFields):
    data: list[ServiceTypeV1]


class ServiceTypeResponseV1(EnvelopeFields):
    data: ServiceTypeV1
