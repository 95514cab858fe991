# This file provides shared helpers for API endpoint tests.
# Tests override service dependencies with fakes so no database is touched, and
# mint bearer tokens signed with the test config's secret.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient
from jose import jwt

from src.api.api_config import DEFAULT_TABLE_NAMES, ApiConfig
from src.api.app import app
from src.api.dependencies import (
    get_config,
    get_database_client,
    get_inquiry_service,
    get_request_service,
    get_run_summary_service,
    get_service_type_service,
    get_sos_service,
)

TEST_JWT_SECRET = "endpoint-test-secret"


def build_test_config(*, branch_override_roles: list[str] | None = None) -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Dispatch API",
        api_version_path="/api/v1",
        schema_version="1.0.0",
        environment="test",
        log_level="INFO",
        database_url="sqlite+pysqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        jwt_algorithm="HS256",
        allowed_origins=[],
        branch_override_roles=branch_override_roles or [],
        app_version="0.1.0",
        allowed_table_names=set(DEFAULT_TABLE_NAMES.values()),
    )


def make_token(
    *,
    branch_id: int | None = 7,
    name: str | None = "Harbour Branch",
    role: str = "branch",
    client_id: int | None = 3,
    secret: str = TEST_JWT_SECRET,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    claims: dict[str, Any] = {
        "id": branch_id,
        "branchId": branch_id,
        "name": name,
        "role": role,
        "clientId": client_id,
        "exp": datetime.now(tz=UTC) + expires_in,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(**token_kwargs: Any) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(**token_kwargs)}"}


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables or {"requests", "branches", "service_types"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    request_service: Any | None = None,
    run_summary_service: Any | None = None,
    service_type_service: Any | None = None,
    inquiry_service: Any | None = None,
    sos_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if request_service is not None:
        app.dependency_overrides[get_request_service] = lambda: request_service
    if run_summary_service is not None:
        app.dependency_overrides[get_run_summary_service] = lambda: run_summary_service
    if service_type_service is not None:
        app.dependency_overrides[get_service_type_service] = lambda: service_type_service
    if inquiry_service is not None:
        app.dependency_overrides[get_inquiry_service] = lambda: inquiry_service
    if sos_service is not None:
        app.dependency_overrides[get_sos_service] = lambda: sos_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
