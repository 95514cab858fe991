# This file tests the run summary report endpoint.
# The report is public, reports per-day totals in camelCase and validates its filters.

from __future__ import annotations

from datetime import date
from typing import Any

from tests.api.support import api_test_client


class FakeRunSummaryService:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def summarize_runs(self, **kwargs: Any) -> list[dict[str, Any]]:
        self.calls.append(kwargs)
        return [
            {
                "run_date": date(2026, 3, 2),
                "total_runs": 2,
                "total_runs_completed": 1,
                "total_amount": 150.0,
                "total_amount_completed": 100.0,
            }
        ]


def test_run_summaries_return_day_totals_without_token() -> None:
    service = FakeRunSummaryService()
    with api_test_client(run_summary_service=service) as client:
        response = client.get(
            "/api/v1/runs/summaries",
            params={"year": 2026, "month": 3, "clientId": 3, "branchId": 7},
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 1
    assert payload["data"][0] == {
        "date": "2026-03-02",
        "totalRuns": 2,
        "totalRunsCompleted": 1,
        "totalAmount": 150.0,
        "totalAmountCompleted": 100.0,
    }
    assert service.calls == [{"year": 2026, "month": 3, "client_id": 3, "branch_id": 7}]


def test_run_summaries_reject_out_of_range_month() -> None:
    service = FakeRunSummaryService()
    with api_test_client(run_summary_service=service) as client:
        response = client.get("/api/v1/runs/summaries", params={"month": 13})

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert service.calls == []
