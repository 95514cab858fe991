# This file defines inquiry endpoints. Every route requires a bearer token.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.api.api_config import ApiConfig
from src.api.auth import IdentityDep
from src.api.dependencies import get_config, get_inquiry_service
from src.api.response_envelope import build_list_envelope, build_object_envelope
from src.api.schemas.common import MessageResponseV1
from src.api.schemas.inquiry_schemas import (
    InquiryCreateV1,
    InquiryListResponseV1,
    InquiryResponseV1,
    InquiryUpdateV1,
)
from src.api.services.inquiry_service import InquiryService

router = APIRouter(prefix="/inquiries", tags=["inquiries"])
InquiryServiceDep = Annotated[InquiryService, Depends(get_inquiry_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


def _list_response(request: Request, config: ApiConfig, rows: list[dict[str, object]]) -> dict[str, object]:
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=rows,
    )


def _object_response(request: Request, config: ApiConfig, row: dict[str, object]) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=row,
    )


@router.get("", response_model=InquiryListResponseV1)
def list_inquiries(
    request: Request,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
    status_filter: str | None = Query(default=None, alias="status"),
    inquiry_type: str | None = Query(default=None, alias="inquiryType"),
) -> dict[str, object]:
    rows = service.list_inquiries(status=status_filter, inquiry_type=inquiry_type)
    return _list_response(request, config, rows)


@router.get("/status/{inquiry_status}", response_model=InquiryListResponseV1)
def list_inquiries_by_status(
    inquiry_status: str,
    request: Request,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
) -> dict[str, object]:
    return _list_response(request, config, service.list_inquiries(status=inquiry_status))


@router.get("/type/{inquiry_type}", response_model=InquiryListResponseV1)
def list_inquiries_by_type(
    inquiry_type: str,
    request: Request,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
) -> dict[str, object]:
    return _list_response(request, config, service.list_inquiries(inquiry_type=inquiry_type))


@router.get("/{inquiry_id}", response_model=InquiryResponseV1)
def get_inquiry(
    inquiry_id: int,
    request: Request,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
) -> dict[str, object]:
    return _object_response(request, config, service.get_inquiry(inquiry_id=inquiry_id))


@router.post("", response_model=InquiryResponseV1, status_code=status.HTTP_201_CREATED)
def create_inquiry(
    request: Request,
    payload: InquiryCreateV1,
    service: InquiryServiceDep,
    config: ConfigDep,
    identity: IdentityDep,
) -> dict[str, object]:
    created = service.create_inquiry(identity=identity, payload=payload)
    return _object_response(request, config, created)


@router.put("/{inquiry_id}", response_model=InquiryResponseV1)
def update_inquiry(
    inquiry_id: int,
    request: Request,
    payload: InquiryUpdateV1,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
) -> dict[str, object]:
    updated = service.update_inquiry(
        inquiry_id=inquiry_id,
        changes=payload.model_dump(exclude_unset=True),
    )
    return _object_response(request, config, updated)


@router.delete("/{inquiry_id}", response_model=MessageResponseV1)
def delete_inquiry(
    inquiry_id: int,
    request: Request,
    service: InquiryServiceDep,
    config: ConfigDep,
    _: IdentityDep,
) -> dict[str, object]:
    service.delete_inquiry(inquiry_id=inquiry_id)
    return _object_response(request, config, {"message": "Inquiry deleted successfully"})
