"""Root conftest: in-memory SQLite engine and sample project data."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from tracker.models.expense import ExpenseEntry, ProcurementMethod
from tracker.models.partner import Resource
from tracker.models.timesheet import TimesheetEntry, TimesheetStatus

# Matches Alembic head: 3f1a9c2b7d40 (initial schema)
SCHEMA_DDL = """
CREATE TABLE partners (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    is_active BOOLEAN NOT NULL DEFAULT 1
);

CREATE TABLE resources (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    partner_id INTEGER REFERENCES partners(id),
    day_rate INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE timesheets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    resource_id INTEGER NOT NULL REFERENCES resources(id),
    date DATE NOT NULL,
    hours NUMERIC NOT NULL,
    status VARCHAR(20) NOT NULL DEFAULT 'Draft'
);

CREATE TABLE expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    resource_id INTEGER NOT NULL REFERENCES resources(id),
    expense_date DATE NOT NULL,
    amount INTEGER NOT NULL,
    category TEXT NOT NULL,
    reason TEXT NOT NULL DEFAULT '',
    procurement_method VARCHAR(20),
    chargeable_to_customer BOOLEAN NOT NULL DEFAULT 1,
    status VARCHAR(20) NOT NULL DEFAULT ''
);
"""

PARTNER_ID = 1
OTHER_PARTNER_ID = 2


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _resources() -> dict[int, Resource]:
    """R (partner 1, 500/day), S (partner 1, 400/day), O (partner 2), Sup (supplier-employed)."""
    return {
        10: Resource(id=10, name="Rachel Reed", partner_id=PARTNER_ID, day_rate=Decimal("500")),
        11: Resource(id=11, name="Sam Stone", partner_id=PARTNER_ID, day_rate=Decimal("400")),
        20: Resource(id=20, name="Olivia Other", partner_id=OTHER_PARTNER_ID, day_rate=Decimal("600")),
        30: Resource(id=30, name="Simon Supplier", partner_id=None, day_rate=Decimal("700")),
    }


def _timesheet(entry_id: int | None, resource_id: int = 10, day: date = date(2025, 3, 3), **overrides) -> TimesheetEntry:
    defaults = dict(
        id=entry_id,
        resource_id=resource_id,
        date=day,
        hours=Decimal("8"),
        status=TimesheetStatus.VALIDATED,
    )
    defaults.update(overrides)
    return TimesheetEntry(**defaults)


def _expense(entry_id: int | None, resource_id: int = 10, day: date = date(2025, 3, 5), **overrides) -> ExpenseEntry:
    defaults = dict(
        id=entry_id,
        resource_id=resource_id,
        date=day,
        amount=Decimal("120"),
        category="Travel",
        reason="Train to site",
        procurement_method=ProcurementMethod.PARTNER,
        chargeable_to_customer=True,
        status="Approved",
    )
    defaults.update(overrides)
    return ExpenseEntry(**defaults)


@pytest.fixture()
def resources():
    return _resources()


@pytest.fixture()
def make_timesheet():
    return _timesheet


@pytest.fixture()
def make_expense():
    return _expense
