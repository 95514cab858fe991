# This file provides dependency factories for FastAPI routes and middleware.
# Services and the database client are created once per process and shared through
# dependency injection; tests swap them with `app.dependency_overrides`.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.services.inquiry_service import InquiryService
from src.api.services.request_service import RequestService
from src.api.services.run_summary_service import RunSummaryService
from src.api.services.service_type_service import ServiceTypeService
from src.api.services.sos_service import SosService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


def close_database_client() -> None:
    """Dispose the shared connection pool and drop services bound to it."""

    if get_database_client.cache_info().currsize:
        get_database_client().dispose()
    get_database_client.cache_clear()
    for factory in _SERVICE_FACTORIES:
        factory.cache_clear()


@lru_cache(maxsize=1)
def get_request_service() -> RequestService:
    config = get_api_config()
    db_client = get_database_client()
    return RequestService(config=config, db=db_client)


@lru_cache(maxsize=1)
def get_run_summary_service() -> RunSummaryService:
    config = get_api_config()
    db_client = get_database_client()
    return RunSummaryService(config=config, db=db_client)


@lru_cache(maxsize=1)
def get_service_type_service() -> ServiceTypeService:
    config = get_api_config()
    db_client = get_database_client()
    return ServiceTypeService(config=config, db=db_client)


@lru_cache(maxsize=1)
def get_inquiry_service() -> InquiryService:
    config = get_api_config()
    db_client = get_database_client()
    return InquiryService(config=config, db=db_client)


@lru_cache(maxsize=1)
def get_sos_service() -> SosService:
    config = get_api_config()
    db_client = get_database_client()
    return SosService(config=config, db=db_client)


_SERVICE_FACTORIES = (
    get_request_service,
    get_run_summary_service,
    get_service_type_service,
    get_inquiry_service,
    get_sos_service,
)


def get_config() -> ApiConfig:
    return get_api_config()
