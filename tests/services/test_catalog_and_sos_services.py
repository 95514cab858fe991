"""
Service tests for the service-type catalog and SOS alerts against SQLite.
"""

from __future__ import annotations

import pytest

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import NotFoundError, ValidationFailedError
from src.api.services.service_type_service import ServiceTypeService
from src.api.services.sos_service import SosService


def test_service_types_are_listed_by_name(service_config: ApiConfig, sqlite_db: DatabaseClient) -> None:
    service = ServiceTypeService(config=service_config, db=sqlite_db)

    assert [row["name"] for row in service.list_service_types()] == ["ATM replenishment", "Cash pickup"]
    assert service.get_service_type(service_type_id=1) == {
        "id": 1,
        "name": "Cash pickup",
        "description": "Scheduled collection",
    }
    assert service.get_service_type(service_type_id=99) is None


@pytest.fixture
def sos_service(service_config: ApiConfig, sqlite_db: DatabaseClient) -> SosService:
    sqlite_db.execute(
        "INSERT INTO sos (id, guard_id, latitude, longitude) VALUES (5, 21, -1.28, 36.82)"
    )
    return SosService(config=service_config, db=sqlite_db)


def test_sos_alerts_include_guard_name(sos_service: SosService) -> None:
    alerts = sos_service.list_alerts()

    assert len(alerts) == 1
    assert alerts[0]["guard_name"] == "J. Okafor"
    assert alerts[0]["status"] == "pending"


def test_sos_status_update(sos_service: SosService) -> None:
    updated = sos_service.update_status(alert_id=5, status="resolved", comment="Guard safe")

    assert updated["status"] == "resolved"
    assert updated["comment"] == "Guard safe"


def test_sos_status_update_rejects_invalid_status_and_missing_alert(sos_service: SosService) -> None:
    with pytest.raises(ValidationFailedError):
        sos_service.update_status(alert_id=5, status="escalated", comment=None)
    with pytest.raises(NotFoundError):
        sos_service.update_status(alert_id=77, status="resolved", comment=None)

    assert sos_service.list_alerts()[0]["status"] == "pending"
