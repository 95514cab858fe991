# This file implements SOS alert listing and status transitions.

from __future__ import annotations

import logging
from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import NotFoundError, ValidationFailedError

LOGGER = logging.getLogger("sos")

SOS_STATUSES: tuple[str, ...] = ("pending", "in_progress", "resolved")


class SosService:
    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.sos_table = self.config.validate_table_name(self.config.sos_table_name)
        self.staff_table = self.config.validate_table_name(self.config.staff_table_name)

    def list_alerts(self) -> list[dict[str, Any]]:
        return self.db.fetch_all(f"{self._select_sql()} ORDER BY s.created_at DESC, s.id DESC")

    def update_status(self, *, alert_id: int, status: str | None, comment: str | None) -> dict[str, Any]:
        if status not in SOS_STATUSES:
            raise ValidationFailedError(
                "Invalid status",
                details={"allowed": list(SOS_STATUSES)},
            )

        updated = self.db.execute(
            f"UPDATE {self.sos_table} SET status = :status, comment = :comment WHERE id = :alert_id",
            {"status": status, "comment": comment or None, "alert_id": alert_id},
        )
        if updated == 0:
            raise NotFoundError("SOS alert not found")
        LOGGER.info("SOS alert id=%s moved to %s", alert_id, status)

        row = self.db.fetch_one(f"{self._select_sql()} WHERE s.id = :alert_id", {"alert_id": alert_id})
        if row is None:
            raise NotFoundError("SOS alert not found")
        return row

    def _select_sql(self) -> str:
        return f"""
        SELECT
            s.id,
            s.guard_id,
            st.name AS guard_name,
            s.status,
            s.comment,
            s.latitude,
            s.longitude,
            s.created_at
        FROM {self.sos_table} s
        LEFT JOIN {self.staff_table} st ON s.guard_id = st.id
        """
