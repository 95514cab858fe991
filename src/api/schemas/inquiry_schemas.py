# This file defines inquiry payloads and rows.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from src.api.schemas.common import CamelModel, EnvelopeFields, ListEnvelopeFields

InquiryType = Literal["general", "service", "billing", "support", "other"]
InquiryStatus = Literal["pending", "in_progress", "resolved", "closed"]
InquiryPriority = Literal["low", "medium", "high"]


class InquiryCreateV1(CamelModel):
    subject: str | None = None
    message: str | None = None
    inquiry_type: InquiryType | None = None


class InquiryUpdateV1(CamelModel):
    status: InquiryStatus | None = None
    priority: InquiryPriority | None = None
    assigned_to: int | None = None
    response: str | None = None


class InquiryRowV1(CamelModel):
    id: int
    user_id: int | None = None
    user_name: str | None = None
    user_email: str | None = None
    subject: str
    message: str
    inquiry_type: str | None = None
    status: str | None = None
    priority: str | None = None
    assigned_to: int | None = None
    assigned_staff_name: str | None = None
    response: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InquiryListResponseV1(ListEnvelopeFields):
    data: list[InquiryRowV1]


class InquiryResponseV1(EnvelopeFields):
    data: InquiryRowV1
