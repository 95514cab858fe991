# This file serves the fixed service-type catalog referenced by requests.

from __future__ import annotations

from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient


class ServiceTypeService:
    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.service_types_table = self.config.validate_table_name(
            self.config.service_types_table_name
        )

    def list_service_types(self) -> list[dict[str, Any]]:
        query = f"""
        SELECT st.id, st.name, st.description
        FROM {self.service_types_table} st
        ORDER BY st.name ASC, st.id ASC
        """
        return self.db.fetch_all(query)

    def get_service_type(self, *, service_type_id: int) -> dict[str, Any] | None:
        query = f"""
        SELECT st.id, st.name, st.description
        FROM {self.service_types_table} st
        WHERE st.id = :service_type_id
        """
        return self.db.fetch_one(query, {"service_type_id": service_type_id})
