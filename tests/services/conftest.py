"""
Fixtures for service tests backed by a throwaway SQLite database.
The seeded schema mirrors the production relations closely enough for every
service query to run unchanged.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import text

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.schemas.auth_schemas import Identity
from tests.api.support import build_test_config

sqlite3.register_adapter(Decimal, str)
sqlite3.register_adapter(datetime, lambda value: value.isoformat(" "))

SCHEMA_STATEMENTS = (
    "CREATE TABLE clients (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    """
    CREATE TABLE branches (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT,
        client_id INTEGER REFERENCES clients (id)
    )
    """,
    "CREATE TABLE service_types (id INTEGER PRIMARY KEY, name TEXT NOT NULL, description TEXT)",
    "CREATE TABLE staff (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    "CREATE TABLE teams (id INTEGER PRIMARY KEY, name TEXT NOT NULL, crew_commander_id INTEGER)",
    """
    CREATE TABLE requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        branch_id INTEGER NOT NULL,
        branch_name TEXT,
        service_type_id INTEGER,
        pickup_location TEXT,
        delivery_location TEXT,
        pickup_date TIMESTAMP,
        description TEXT,
        priority TEXT,
        status TEXT,
        my_status INTEGER DEFAULT 0,
        team_id INTEGER,
        staff_id INTEGER,
        price NUMERIC,
        latitude REAL,
        longitude REAL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE inquiries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        subject TEXT NOT NULL,
        message TEXT NOT NULL,
        inquiry_type TEXT DEFAULT 'general',
        status TEXT DEFAULT 'pending',
        priority TEXT DEFAULT 'medium',
        assigned_to INTEGER,
        response TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE sos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        guard_id INTEGER,
        status TEXT DEFAULT 'pending',
        comment TEXT,
        latitude REAL,
        longitude REAL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
)

SEED_STATEMENTS = (
    "INSERT INTO clients (id, name) VALUES (3, 'Acme Retail'), (4, 'Northwind')",
    """
    INSERT INTO branches (id, name, email, client_id) VALUES
        (7, 'Harbour Branch', 'harbour@example.com', 3),
        (8, 'Hill Branch', 'hill@example.com', 3),
        (9, 'Northwind Depot', 'depot@example.com', 4)
    """,
    """
    INSERT INTO service_types (id, name, description) VALUES
        (1, 'Cash pickup', 'Scheduled collection'),
        (2, 'ATM replenishment', NULL)
    """,
    "INSERT INTO staff (id, name) VALUES (21, 'J. Okafor'), (22, 'M. Wanjiru')",
    "INSERT INTO teams (id, name, crew_commander_id) VALUES (4, 'Alpha', 22), (5, 'Bravo', NULL)",
)


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    client = DatabaseClient(database_url=f"sqlite:///{tmp_path / 'dispatch.db'}")
    with client.engine.begin() as connection:
        for statement in (*SCHEMA_STATEMENTS, *SEED_STATEMENTS):
            connection.execute(text(statement))
    yield client
    client.dispose()


@pytest.fixture
def service_config() -> ApiConfig:
    return build_test_config()


@pytest.fixture
def harbour_identity() -> Identity:
    return Identity(id=7, branch_id=7, name="Harbour Branch", role="branch", client_id=3)


@pytest.fixture
def hill_identity() -> Identity:
    return Identity(id=8, branch_id=8, name="Hill Branch", role="branch", client_id=3)
