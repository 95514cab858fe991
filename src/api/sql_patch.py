# This file turns a partial update into a parameterized SET clause.
# A patch is a mapping from known field names to new values; only present keys are
# written, and column names always come from the caller's allowlisted column map.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def build_set_clause(
    changes: Mapping[str, Any],
    *,
    columns: Mapping[str, str],
) -> tuple[str, dict[str, Any]]:
    """Return the SET clause and bound parameters for the fields present in `changes`.

    Unknown keys raise ValueError. Parameters are prefixed with `set_` so they never
    collide with WHERE-clause parameters.
    """

    unknown = sorted(set(changes) - set(columns))
    if unknown:
        raise ValueError(f"Unsupported patch fields: {', '.join(unknown)}")
    if not changes:
        raise ValueError("Patch contains no fields")

    assignments: list[str] = []
    params: dict[str, Any] = {}
    for field_name, column in columns.items():
        if field_name not in changes:
            continue
        assignments.append(f"{column} = :set_{column}")
        params[f"set_{column}"] = changes[field_name]
    return ", ".join(assignments), params
