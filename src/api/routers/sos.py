# This file defines SOS alert endpoints used by the dispatch console.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_sos_service
from src.api.response_envelope import build_list_envelope, build_object_envelope
from src.api.schemas.sos_schemas import SosListResponseV1, SosResponseV1, SosStatusUpdateV1
from src.api.services.sos_service import SosService

router = APIRouter(prefix="/sos", tags=["sos"])
SosServiceDep = Annotated[SosService, Depends(get_sos_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


@router.get("", response_model=SosListResponseV1)
def list_sos_alerts(
    request: Request,
    service: SosServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=service.list_alerts(),
    )


@router.patch("/{alert_id}/status", response_model=SosResponseV1)
def update_sos_status(
    alert_id: int,
    request: Request,
    payload: SosStatusUpdateV1,
    service: SosServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    updated = service.update_status(alert_id=alert_id, status=payload.status, comment=payload.comment)
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=updated,
    )
