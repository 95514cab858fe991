# This file implements inquiry handling: branches submit questions, staff triage them
# through status, priority, assignment and a written response.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient, StoreError
from src.api.error_handlers import NotFoundError, UnauthenticatedError, ValidationFailedError
from src.api.schemas.auth_schemas import Identity
from src.api.schemas.inquiry_schemas import InquiryCreateV1
from src.api.sql_patch import build_set_clause

LOGGER = logging.getLogger("inquiries")

DEFAULT_INQUIRY_TYPE = "general"

INQUIRY_UPDATE_COLUMNS: dict[str, str] = {
    "status": "status",
    "priority": "priority",
    "assigned_to": "assigned_to",
    "response": "response",
}


class InquiryService:
    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.inquiries_table = self.config.validate_table_name(self.config.inquiries_table_name)
        self.branches_table = self.config.validate_table_name(self.config.branches_table_name)
        self.staff_table = self.config.validate_table_name(self.config.staff_table_name)

    def list_inquiries(
        self,
        *,
        status: str | None = None,
        inquiry_type: str | None = None,
    ) -> list[dict[str, Any]]:
        where_clauses: list[str] = ["1 = 1"]
        params: dict[str, Any] = {}

        if status:
            where_clauses.append("i.status = :status")
            params["status"] = status
        if inquiry_type:
            where_clauses.append("i.inquiry_type = :inquiry_type")
            params["inquiry_type"] = inquiry_type

        query = f"""
        {self._select_sql()}
        WHERE {" AND ".join(where_clauses)}
        ORDER BY i.created_at DESC, i.id DESC
        """
        return self.db.fetch_all(query, params)

    def get_inquiry(self, *, inquiry_id: int) -> dict[str, Any]:
        row = self.db.fetch_one(
            f"{self._select_sql()} WHERE i.id = :inquiry_id",
            {"inquiry_id": inquiry_id},
        )
        if row is None:
            raise NotFoundError("Inquiry not found")
        return row

    def create_inquiry(self, *, identity: Identity, payload: InquiryCreateV1) -> dict[str, Any]:
        if not payload.subject or not payload.message:
            raise ValidationFailedError("Subject and message are required")
        if identity.branch_id is None:
            raise UnauthenticatedError("User not authenticated")

        inquiry_id = self.db.insert_returning(
            f"""
            INSERT INTO {self.inquiries_table} (user_id, subject, message, inquiry_type)
            VALUES (:user_id, :subject, :message, :inquiry_type)
            RETURNING id
            """,
            {
                "user_id": identity.branch_id,
                "subject": payload.subject,
                "message": payload.message,
                "inquiry_type": payload.inquiry_type or DEFAULT_INQUIRY_TYPE,
            },
        )
        LOGGER.info("Created inquiry id=%s user_id=%s", inquiry_id, identity.branch_id)
        try:
            return self.get_inquiry(inquiry_id=int(inquiry_id))
        except NotFoundError as exc:
            raise StoreError(f"Inquiry {inquiry_id} was not readable after insert") from exc

    def update_inquiry(self, *, inquiry_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        if not self._inquiry_exists(inquiry_id):
            raise NotFoundError("Inquiry not found")

        resolved = {name: value for name, value in changes.items() if name in INQUIRY_UPDATE_COLUMNS}
        if resolved:
            set_sql, params = build_set_clause(resolved, columns=INQUIRY_UPDATE_COLUMNS)
            params["inquiry_id"] = inquiry_id
            self.db.execute(
                f"""
                UPDATE {self.inquiries_table}
                SET {set_sql}, updated_at = CURRENT_TIMESTAMP
                WHERE id = :inquiry_id
                """,
                params,
            )
            LOGGER.info("Updated inquiry id=%s fields=%s", inquiry_id, ",".join(sorted(resolved)))
        return self.get_inquiry(inquiry_id=inquiry_id)

    def delete_inquiry(self, *, inquiry_id: int) -> None:
        if not self._inquiry_exists(inquiry_id):
            raise NotFoundError("Inquiry not found")
        self.db.execute(
            f"DELETE FROM {self.inquiries_table} WHERE id = :inquiry_id",
            {"inquiry_id": inquiry_id},
        )
        LOGGER.info("Deleted inquiry id=%s", inquiry_id)

    def _inquiry_exists(self, inquiry_id: int) -> bool:
        query = f"SELECT 1 FROM {self.inquiries_table} WHERE id = :inquiry_id LIMIT 1"
        return self.db.fetch_one(query, {"inquiry_id": inquiry_id}) is not None

    def _select_sql(self) -> str:
        return f"""
        SELECT
            i.id,
            i.user_id,
            b.name AS user_name,
            b.email AS user_email,
            i.subject,
            i.message,
            i.inquiry_type,
            i.status,
            i.priority,
            i.assigned_to,
            s.name AS assigned_staff_name,
            i.response,
            i.created_at,
            i.updated_at
        FROM {self.inquiries_table} i
        LEFT JOIN {self.branches_table} b ON i.user_id = b.id
        LEFT JOIN {self.staff_table} s ON i.assigned_to = s.id
        """
