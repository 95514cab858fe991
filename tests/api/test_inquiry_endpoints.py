# This file tests inquiry endpoints: token enforcement, filtered listings and
# the create, update and delete flow against a fake service.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.api.error_handlers import NotFoundError
from tests.api.support import api_test_client, auth_headers


def _inquiry(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": 3,
        "user_id": 7,
        "user_name": "Harbour Branch",
        "user_email": "harbour@example.com",
        "subject": "Late pickup",
        "message": "The 9am pickup arrived at 11am.",
        "inquiry_type": "service",
        "status": "pending",
        "priority": "medium",
        "assigned_to": None,
        "assigned_staff_name": None,
        "response": None,
        "created_at": datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
        "updated_at": datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
    }
    row.update(overrides)
    return row


class FakeInquiryService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def list_inquiries(self, **kwargs: Any) -> list[dict[str, Any]]:
        self.calls.append(("list", kwargs))
        return [_inquiry()]

    def get_inquiry(self, *, inquiry_id: int) -> dict[str, Any]:
        if inquiry_id != 3:
            raise NotFoundError("Inquiry not found")
        return _inquiry()

    def create_inquiry(self, *, identity: Any, payload: Any) -> dict[str, Any]:
        self.calls.append(("create", {"identity": identity, "payload": payload}))
        return _inquiry(subject=payload.subject, inquiry_type=payload.inquiry_type or "general")

    def update_inquiry(self, *, inquiry_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update", {"inquiry_id": inquiry_id, "changes": changes}))
        return _inquiry(**changes)

    def delete_inquiry(self, *, inquiry_id: int) -> None:
        self.get_inquiry(inquiry_id=inquiry_id)


def test_inquiries_require_bearer_token() -> None:
    with api_test_client(inquiry_service=FakeInquiryService()) as client:
        response = client.get("/api/v1/inquiries")

    assert response.status_code == 401


def test_list_inquiries_by_query_and_path_filters() -> None:
    service = FakeInquiryService()
    with api_test_client(inquiry_service=service) as client:
        by_query = client.get(
            "/api/v1/inquiries",
            params={"status": "pending", "inquiryType": "service"},
            headers=auth_headers(),
        )
        by_status = client.get("/api/v1/inquiries/status/resolved", headers=auth_headers())
        by_type = client.get("/api/v1/inquiries/type/billing", headers=auth_headers())

    assert by_query.status_code == 200
    assert by_query.json()["data"][0]["userEmail"] == "harbour@example.com"
    assert by_status.status_code == 200
    assert by_type.status_code == 200
    assert [kwargs for _, kwargs in service.calls] == [
        {"status": "pending", "inquiry_type": "service"},
        {"status": "resolved"},
        {"inquiry_type": "billing"},
    ]


def test_create_inquiry_uses_caller_identity() -> None:
    service = FakeInquiryService()
    with api_test_client(inquiry_service=service) as client:
        response = client.post(
            "/api/v1/inquiries",
            json={"subject": "Invoice", "message": "Please resend March invoice."},
            headers=auth_headers(branch_id=12),
        )

    assert response.status_code == 201
    assert response.json()["data"]["inquiryType"] == "general"
    _, kwargs = service.calls[0]
    assert kwargs["identity"].branch_id == 12


def test_update_inquiry_forwards_present_fields_only() -> None:
    service = FakeInquiryService()
    with api_test_client(inquiry_service=service) as client:
        response = client.put(
            "/api/v1/inquiries/3",
            json={"status": "resolved", "assignedTo": 21},
            headers=auth_headers(),
        )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "resolved"
    assert service.calls[0][1]["changes"] == {"status": "resolved", "assigned_to": 21}


def test_update_inquiry_rejects_unknown_status() -> None:
    with api_test_client(inquiry_service=FakeInquiryService()) as client:
        response = client.put("/api/v1/inquiries/3", json={"status": "archived"}, headers=auth_headers())

    assert response.status_code == 400


def test_get_and_delete_inquiry() -> None:
    with api_test_client(inquiry_service=FakeInquiryService()) as client:
        found = client.get("/api/v1/inquiries/3", headers=auth_headers())
        missing = client.get("/api/v1/inquiries/9", headers=auth_headers())
        deleted = client.delete("/api/v1/inquiries/3", headers=auth_headers())

    assert found.status_code == 200
    assert missing.status_code == 404
    assert deleted.status_code == 200
    assert deleted.json()["data"] == {"message": "Inquiry deleted successfully"}
