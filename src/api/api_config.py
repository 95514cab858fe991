# This file defines runtime settings for the API layer in one place.
# Endpoint versioning, credentials, CORS origins and table names are read from the
# environment with local-development defaults.
# Table names are validated so they can be interpolated into SQL safely.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

DEFAULT_TABLE_NAMES: dict[str, str] = {
    "requests_table_name": "requests",
    "branches_table_name": "branches",
    "clients_table_name": "clients",
    "service_types_table_name": "service_types",
    "teams_table_name": "teams",
    "staff_table_name": "staff",
    "inquiries_table_name": "inquiries",
    "sos_table_name": "sos",
}


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Branch Dispatch API"
    api_version_path: str = "/api/v1"
    schema_version: str = "1.0.0"
    environment: str = "local"
    log_level: str = "INFO"
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    allowed_origins: list[str] = Field(default_factory=list)
    branch_override_roles: list[str] = Field(default_factory=list)
    requests_table_name: str = "requests"
    branches_table_name: str = "branches"
    clients_table_name: str = "clients"
    service_types_table_name: str = "service_types"
    teams_table_name: str = "teams"
    staff_table_name: str = "staff"
    inquiries_table_name: str = "inquiries"
    sos_table_name: str = "sos"
    app_version: str = "0.1.0"
    allowed_table_names: set[str] = Field(default_factory=set)

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator(*DEFAULT_TABLE_NAMES)
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, value: str) -> str:
        if not value.upper().startswith("HS"):
            raise ValueError("Only HMAC (HS*) JWT algorithms are supported.")
        return value.upper()

    def validate_table_name(self, table_name: str) -> str:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        if table_name not in self.allowed_table_names:
            raise ValueError(f"Table name is not in allowlist: {table_name!r}")
        return table_name


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def _build_allowed_table_names(config_values: dict[str, object]) -> set[str]:
    configured_names = {str(config_values[key]) for key in DEFAULT_TABLE_NAMES}
    configured_names.update(DEFAULT_TABLE_NAMES.values())
    configured_names.update(_env_list("API_ALLOWED_TABLE_NAMES", []))
    for table_name in configured_names:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier in allowlist: {table_name!r}")
    return configured_names


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Branch Dispatch API"),
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "schema_version": os.getenv("API_SCHEMA_VERSION", "1.0.0"),
        "environment": os.getenv("ENV", "local"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "jwt_secret": os.getenv("JWT_SECRET", ""),
        "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "branch_override_roles": _env_list("API_BRANCH_OVERRIDE_ROLES", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    for key, default in DEFAULT_TABLE_NAMES.items():
        config_values[key] = os.getenv(f"API_{key.upper()}", default)

    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")
    if not config_values["jwt_secret"]:
        raise RuntimeError("JWT_SECRET is required for API startup.")

    config_values["allowed_table_names"] = _build_allowed_table_names(config_values)

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
