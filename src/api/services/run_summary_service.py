# This file implements the per-day run summary report.
# Only finalized runs (my_status = 3) are counted; the aggregation is a single
# grouped query so totals are computed by the store, not in Python.

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import extract, literal_column

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient

FINALIZED_MY_STATUS = 3
COMPLETED_STATUS = "completed"


class RunSummaryService:
    """Read-only reporting over the requests relation."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.requests_table = self.config.validate_table_name(self.config.requests_table_name)
        self.branches_table = self.config.validate_table_name(self.config.branches_table_name)

    def summarize_runs(
        self,
        *,
        year: int | None,
        month: int | None,
        client_id: int | None,
        branch_id: int | None,
    ) -> list[dict[str, Any]]:
        where_clauses: list[str] = ["r.my_status = :finalized_status"]
        params: dict[str, Any] = {
            "finalized_status": FINALIZED_MY_STATUS,
            "completed_status": COMPLETED_STATUS,
        }

        if year:
            period_start, period_end = _period_bounds(year, month)
            where_clauses.append("r.pickup_date >= :period_start AND r.pickup_date < :period_end")
            params["period_start"] = period_start
            params["period_end"] = period_end
        elif month:
            # Without a year the month matches across every year.
            where_clauses.append(f"{self._pickup_month_sql()} = :month")
            params["month"] = month
        if client_id:
            where_clauses.append("b.client_id = :client_id")
            params["client_id"] = client_id
        if branch_id:
            where_clauses.append("r.branch_id = :branch_id")
            params["branch_id"] = branch_id

        query = f"""
        SELECT
            DATE(r.pickup_date) AS run_date,
            COUNT(*) AS total_runs,
            SUM(CASE WHEN r.status = :completed_status THEN 1 ELSE 0 END) AS total_runs_completed,
            COALESCE(SUM(r.price), 0) AS total_amount,
            COALESCE(SUM(CASE WHEN r.status = :completed_status THEN r.price ELSE 0 END), 0)
                AS total_amount_completed
        FROM {self.requests_table} r
        LEFT JOIN {self.branches_table} b ON r.branch_id = b.id
        WHERE {" AND ".join(where_clauses)}
        GROUP BY DATE(r.pickup_date)
        ORDER BY run_date DESC
        """
        return self.db.fetch_all(query, params)

    def _pickup_month_sql(self) -> str:
        expression = extract("month", literal_column("r.pickup_date"))
        return str(expression.compile(dialect=self.db.engine.dialect))


def _period_bounds(year: int, month: int | None) -> tuple[datetime, datetime]:
    """Return the half-open [start, end) pickup window for a year or a month of a year."""

    if month is None:
        return datetime(year, 1, 1), datetime(year + 1, 1, 1)
    if month == 12:
        return datetime(year, 12, 1), datetime(year + 1, 1, 1)
    return datetime(year, month, 1), datetime(year, month + 1, 1)
