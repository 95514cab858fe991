# This file defines the run summary report endpoint. It is readable without a token.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_run_summary_service
from src.api.response_envelope import build_list_envelope
from src.api.schemas.run_schemas import RunSummaryListResponseV1
from src.api.services.run_summary_service import RunSummaryService

router = APIRouter(prefix="/runs", tags=["runs"])
RunSummaryServiceDep = Annotated[RunSummaryService, Depends(get_run_summary_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


@router.get("/summaries", response_model=RunSummaryListResponseV1)
def run_summaries(
    request: Request,
    service: RunSummaryServiceDep,
    config: ConfigDep,
    year: int | None = Query(default=None, ge=1970, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    client_id: int | None = Query(default=None, alias="clientId"),
    branch_id: int | None = Query(default=None, alias="branchId"),
) -> dict[str, object]:
    rows = service.summarize_runs(
        year=year,
        month=month,
        client_id=client_id,
        branch_id=branch_id,
    )
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=rows,
    )
