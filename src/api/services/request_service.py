# This file implements the request ("run") lifecycle: creation, branch-scoped listing,
# partial updates and deletion.
# Every statement is parameterized; the only interpolated SQL fragments are allowlisted
# table names and column names taken from REQUEST_PATCH_COLUMNS.

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic.alias_generators import to_camel

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient, StoreError
from src.api.error_handlers import (
    ForbiddenError,
    NotFoundError,
    UnknownReferenceError,
    ValidationFailedError,
)
from src.api.schemas.auth_schemas import Identity
from src.api.schemas.request_schemas import RequestCreateV1
from src.api.sql_patch import build_set_clause

LOGGER = logging.getLogger("requests")

DEFAULT_PRIORITY = "medium"
INITIAL_STATUS = "pending"
INITIAL_MY_STATUS = 0

REQUIRED_CREATE_FIELDS: tuple[str, ...] = (
    "branch_id",
    "branch_name",
    "service_type_id",
    "pickup_location",
    "delivery_location",
    "pickup_date",
    "price",
)

# Patchable field -> requests column. staff_id is derived from team_id, never sent by callers.
REQUEST_PATCH_COLUMNS: dict[str, str] = {
    "branch_name": "branch_name",
    "service_type_id": "service_type_id",
    "pickup_location": "pickup_location",
    "delivery_location": "delivery_location",
    "pickup_date": "pickup_date",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "my_status": "my_status",
    "team_id": "team_id",
    "staff_id": "staff_id",
    "latitude": "latitude",
    "longitude": "longitude",
}


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class RequestService:
    """Tenant-scoped CRUD for service requests."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.requests_table = self.config.validate_table_name(self.config.requests_table_name)
        self.branches_table = self.config.validate_table_name(self.config.branches_table_name)
        self.clients_table = self.config.validate_table_name(self.config.clients_table_name)
        self.service_types_table = self.config.validate_table_name(
            self.config.service_types_table_name
        )
        self.teams_table = self.config.validate_table_name(self.config.teams_table_name)
        self.branch_override_roles = set(self.config.branch_override_roles)

    def list_requests(
        self,
        *,
        identity: Identity,
        status: str | None,
        my_status: int | None,
        pickup_date: date | None,
        branch_id: int | None,
    ) -> list[dict[str, Any]]:
        target_branch_id = identity.branch_id
        if branch_id and branch_id != identity.branch_id:
            self._authorize_branch_override(identity, branch_id)
            target_branch_id = branch_id
        if target_branch_id is None:
            return []

        where_clauses: list[str] = ["r.branch_id = :branch_id"]
        params: dict[str, Any] = {"branch_id": target_branch_id}

        if status:
            where_clauses.append("r.status = :status")
            params["status"] = status
        if my_status is not None:
            where_clauses.append("r.my_status = :my_status")
            params["my_status"] = my_status
        if pickup_date is not None:
            where_clauses.append("DATE(r.pickup_date) = :pickup_date")
            params["pickup_date"] = pickup_date.isoformat()

        query = f"""
        {self._select_sql()}
        WHERE {" AND ".join(where_clauses)}
        ORDER BY r.created_at DESC, r.id DESC
        """
        return self.db.fetch_all(query, params)

    def create_request(self, *, identity: Identity, payload: RequestCreateV1) -> dict[str, Any]:
        branch_id = identity.branch_id or payload.branch_id
        branch_name = identity.name or payload.branch_name
        if _is_absent(branch_name) and branch_id:
            branch_name = self._branch_name(branch_id)

        values: dict[str, Any] = {
            "branch_id": branch_id,
            "branch_name": branch_name,
            "service_type_id": payload.service_type_id,
            "pickup_location": payload.pickup_location,
            "delivery_location": payload.delivery_location,
            "pickup_date": payload.pickup_date,
            "description": payload.description or None,
            "priority": payload.priority or DEFAULT_PRIORITY,
            "status": INITIAL_STATUS,
            "my_status": payload.my_status if payload.my_status is not None else INITIAL_MY_STATUS,
            "price": payload.price,
            "latitude": payload.latitude,
            "longitude": payload.longitude,
        }

        missing = [name for name in REQUIRED_CREATE_FIELDS if _is_absent(values[name])]
        if missing:
            LOGGER.info("Rejected request creation, missing fields: %s", ", ".join(missing))
            raise ValidationFailedError(
                "Missing required fields",
                details={"missing": [to_camel(name) for name in missing]},
            )

        if not self._row_exists(self.service_types_table, values["service_type_id"]):
            LOGGER.info("Rejected request creation, unknown service type %s", values["service_type_id"])
            raise UnknownReferenceError(
                "Invalid service type",
                details={"serviceTypeId": values["service_type_id"]},
            )
        if not self._row_exists(self.branches_table, branch_id):
            LOGGER.info("Rejected request creation, unknown branch %s", branch_id)
            raise UnknownReferenceError("Invalid branch", details={"branchId": branch_id})

        insert_query = f"""
        INSERT INTO {self.requests_table} (
            branch_id, branch_name, service_type_id,
            pickup_location, delivery_location, pickup_date,
            description, priority, status, my_status, price,
            latitude, longitude
        ) VALUES (
            :branch_id, :branch_name, :service_type_id,
            :pickup_location, :delivery_location, :pickup_date,
            :description, :priority, :status, :my_status, :price,
            :latitude, :longitude
        )
        RETURNING id
        """
        request_id = int(self.db.insert_returning(insert_query, values))
        LOGGER.info("Created request id=%s branch_id=%s", request_id, branch_id)

        created = self.get_owned_request(request_id=request_id, branch_id=branch_id)
        if created is None:
            raise StoreError(f"Request {request_id} was not readable after insert")
        return created

    def update_request(
        self,
        *,
        identity: Identity,
        request_id: int,
        changes: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Apply the present fields of a partial update to a request owned by the caller."""

        resolved = {name: value for name, value in changes.items() if name in REQUEST_PATCH_COLUMNS}
        resolved.pop("staff_id", None)

        team_id = resolved.get("team_id")
        if team_id:
            lead_id = self._team_lead_id(team_id)
            if lead_id is not None:
                resolved["staff_id"] = lead_id

        if resolved and identity.branch_id is not None:
            set_sql, params = build_set_clause(resolved, columns=REQUEST_PATCH_COLUMNS)
            params["request_id"] = request_id
            params["branch_id"] = identity.branch_id
            updated = self.db.execute(
                f"""
                UPDATE {self.requests_table}
                SET {set_sql}
                WHERE id = :request_id AND branch_id = :branch_id
                """,
                params,
            )
            LOGGER.info(
                "Updated request id=%s branch_id=%s fields=%s rows=%s",
                request_id,
                identity.branch_id,
                ",".join(sorted(resolved)),
                updated,
            )

        row = self.get_owned_request(request_id=request_id, branch_id=identity.branch_id)
        if row is None:
            raise NotFoundError("Request not found")
        return row

    def delete_request(self, *, identity: Identity, request_id: int) -> None:
        if identity.branch_id is None or not self._owned_request_exists(request_id, identity.branch_id):
            raise NotFoundError("Request not found or access denied")

        deleted = self.db.execute(
            f"DELETE FROM {self.requests_table} WHERE id = :request_id AND branch_id = :branch_id",
            {"request_id": request_id, "branch_id": identity.branch_id},
        )
        if deleted == 0:
            raise NotFoundError("Request not found")
        LOGGER.info("Deleted request id=%s branch_id=%s", request_id, identity.branch_id)

    def get_owned_request(self, *, request_id: int, branch_id: int | None) -> dict[str, Any] | None:
        if branch_id is None:
            return None
        query = f"""
        {self._select_sql()}
        WHERE r.id = :request_id AND r.branch_id = :branch_id
        """
        return self.db.fetch_one(query, {"request_id": request_id, "branch_id": branch_id})

    def _authorize_branch_override(self, identity: Identity, branch_id: int) -> None:
        if self.branch_override_roles and identity.role not in self.branch_override_roles:
            raise ForbiddenError("Listing another branch's requests is not permitted for this role.")
        LOGGER.warning(
            "Cross-branch request listing: caller_branch_id=%s target_branch_id=%s role=%s",
            identity.branch_id,
            branch_id,
            identity.role,
        )

    def _select_sql(self) -> str:
        return f"""
        SELECT
            r.id,
            r.branch_id,
            COALESCE(r.branch_name, b.name) AS branch_name,
            c.name AS client_name,
            r.service_type_id,
            st.name AS service_type_name,
            r.pickup_location,
            r.delivery_location,
            r.pickup_date,
            r.description,
            r.priority,
            r.status,
            r.my_status,
            r.team_id,
            r.staff_id,
            r.price,
            r.latitude,
            r.longitude,
            r.created_at,
            r.updated_at
        FROM {self.requests_table} r
        LEFT JOIN {self.branches_table} b ON r.branch_id = b.id
        LEFT JOIN {self.clients_table} c ON b.client_id = c.id
        LEFT JOIN {self.service_types_table} st ON r.service_type_id = st.id
        """

    def _row_exists(self, table_name: str, row_id: Any) -> bool:
        query = f"SELECT 1 FROM {table_name} WHERE id = :row_id LIMIT 1"
        return self.db.fetch_one(query, {"row_id": row_id}) is not None

    def _owned_request_exists(self, request_id: int, branch_id: int) -> bool:
        query = f"""
        SELECT 1 FROM {self.requests_table}
        WHERE id = :request_id AND branch_id = :branch_id
        LIMIT 1
        """
        return self.db.fetch_one(query, {"request_id": request_id, "branch_id": branch_id}) is not None

    def _branch_name(self, branch_id: int) -> str | None:
        row = self.db.fetch_one(
            f"SELECT name FROM {self.branches_table} WHERE id = :branch_id",
            {"branch_id": branch_id},
        )
        return None if row is None else row.get("name")

    def _team_lead_id(self, team_id: int) -> int | None:
        # Best effort: the assignment still applies when the lead cannot be resolved.
        try:
            row = self.db.fetch_one(
                f"SELECT crew_commander_id FROM {self.teams_table} WHERE id = :team_id",
                {"team_id": team_id},
            )
        except StoreError as exc:
            LOGGER.warning("Team lead lookup failed for team_id=%s, staff not assigned: %s", team_id, exc)
            return None
        if row is None or row.get("crew_commander_id") is None:
            return None
        return int(row["crew_commander_id"])
