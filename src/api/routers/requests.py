# This file defines the request ("run") endpoints under the versioned API path.
# All routes require a bearer token; reads and writes are scoped to the caller's branch.

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from src.api.api_config import ApiConfig
from src.api.auth import IdentityDep
from src.api.dependencies import get_config, get_request_service
from src.api.response_envelope import build_list_envelope, build_object_envelope
from src.api.schemas.request_schemas import (
    RequestCreateV1,
    RequestListResponseV1,
    RequestPatchV1,
    RequestResponseV1,
)
from src.api.services.request_service import RequestService

router = APIRouter(prefix="/requests", tags=["requests"])
RequestServiceDep = Annotated[RequestService, Depends(get_request_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


@router.get("", response_model=RequestListResponseV1)
def list_requests(
    request: Request,
    service: RequestServiceDep,
    config: ConfigDep,
    identity: IdentityDep,
    status_filter: str | None = Query(default=None, alias="status"),
    my_status: int | None = Query(default=None, alias="myStatus", ge=0),
    pickup_date: date | None = Query(default=None, alias="pickupDate"),
    branch_id: int | None = Query(default=None, alias="branchId"),
) -> dict[str, object]:
    rows = service.list_requests(
        identity=identity,
        status=status_filter,
        my_status=my_status,
        pickup_date=pickup_date,
        branch_id=branch_id,
    )
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=rows,
    )


@router.post("", response_model=RequestResponseV1, status_code=status.HTTP_201_CREATED)
def create_request(
    request: Request,
    payload: RequestCreateV1,
    service: RequestServiceDep,
    config: ConfigDep,
    identity: IdentityDep,
) -> dict[str, object]:
    created = service.create_request(identity=identity, payload=payload)
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=created,
    )


@router.patch("/{request_id}", response_model=RequestResponseV1)
def update_request(
    request_id: int,
    request: Request,
    payload: RequestPatchV1,
    service: RequestServiceDep,
    config: ConfigDep,
    identity: IdentityDep,
) -> dict[str, object]:
    updated = service.update_request(
        identity=identity,
        request_id=request_id,
        changes=payload.model_dump(exclude_unset=True),
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=updated,
    )


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_request(
    request_id: int,
    service: RequestServiceDep,
    identity: IdentityDep,
) -> Response:
    service.delete_request(identity=identity, request_id=request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
