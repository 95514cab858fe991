# This file defines the authenticated principal decoded from bearer token claims.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """Caller identity; branch_id scopes every tenant-owned read and write."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    branch_id: int | None = Field(default=None, alias="branchId")
    name: str | None = None
    role: str | None = None
    client_id: int | None = Field(default=None, alias="clientId")
