# This file defines the run summary report schemas.

from __future__ import annotations

import datetime as dt

from pydantic import Field

from src.api.schemas.common import CamelModel, ListEnvelopeFields


class RunSummaryRowV1(CamelModel):
    """Aggregates for one pickup day of finalized runs."""

    run_date: dt.date = Field(alias="date")
    total_runs: int
    total_runs_completed: int
    total_amount: float
    total_amount_completed: float


class RunSummaryListResponseV1(ListEnvelopeFields):
    data: list[RunSummaryRowV1]
