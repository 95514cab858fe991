# This file defines the read-only service-type catalog endpoints.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_service_type_service
from src.api.error_handlers import NotFoundError
from src.api.response_envelope import build_list_envelope, build_object_envelope
from src.api.schemas.service_type_schemas import ServiceTypeListResponseV1, ServiceTypeResponseV1
from src.api.services.service_type_service import ServiceTypeService

router = APIRouter(prefix="/service-types", tags=["service-types"])
ServiceTypeServiceDep = Annotated[ServiceTypeService, Depends(get_service_type_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


@router.get("", response_model=ServiceTypeListResponseV1)
def list_service_types(
    request: Request,
    service: ServiceTypeServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=service.list_service_types(),
    )


@router.get("/{service_type_id}", response_model=ServiceTypeResponseV1)
def get_service_type(
    service_type_id: int,
    request: Request,
    service: ServiceTypeServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    row = service.get_service_type(service_type_id=service_type_id)
    if row is None:
        raise NotFoundError("Service type not found")

    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=row,
    )
