"""Seed the database with demo partners, resources, timesheets and expenses.

Usage:
    python -m tracker.scripts.seed
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from tracker.db import get_connection, initialize_db
from tracker.models import format_gbp
from tracker.models.expense import ExpenseEntry, ProcurementMethod
from tracker.models.partner import Partner, Resource
from tracker.models.timesheet import TimesheetEntry, TimesheetStatus
from tracker.repositories.base import ProjectDataRepository
from tracker.repositories.factory import get_project_data_repository

console = Console()
fake = Faker("en_GB")

NUM_PARTNERS = 3
RESOURCES_PER_PARTNER = 3
NUM_SUPPLIER_RESOURCES = 2
DAYS_OF_HISTORY = 90

TABLES_TO_CLEAR = ["expenses", "timesheets", "resources", "partners"]

DAY_RATES = [Decimal("450"), Decimal("500"), Decimal("550"), Decimal("650"), Decimal("800")]

# (category, reason, typical amount)
EXPENSE_TEMPLATES = [
    ("Travel", "Train to client site", Decimal("86.40")),
    ("Travel", "Mileage", Decimal("54.00")),
    ("Accommodation", "Hotel, one night", Decimal("129.00")),
    ("Sustenance", "Working lunch", Decimal("18.50")),
    ("Sustenance", "Evening meal", Decimal("32.75")),
]

TIMESHEET_STATUS_WEIGHTS = [
    (TimesheetStatus.VALIDATED, 6),
    (TimesheetStatus.SUBMITTED, 2),
    (TimesheetStatus.DRAFT, 1),
    (TimesheetStatus.REJECTED, 1),
]


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()
    console.print("[green]All tables cleared.[/green]\n")


def _random_status() -> TimesheetStatus:
    statuses = [s for s, _ in TIMESHEET_STATUS_WEIGHTS]
    weights = [w for _, w in TIMESHEET_STATUS_WEIGHTS]
    return random.choices(statuses, weights=weights, k=1)[0]


def _create_resources(repo: ProjectDataRepository) -> list[Resource]:
    console.print("[cyan]Creating partners and resources...[/cyan]")
    resources: list[Resource] = []

    for _ in range(NUM_PARTNERS):
        partner = repo.create_partner(Partner(name=fake.company()))
        console.print(f"  Partner: {partner.name} (id={partner.id})")
        for _ in range(RESOURCES_PER_PARTNER):
            resource = repo.create_resource(
                Resource(name=fake.name(), partner_id=partner.id, day_rate=random.choice(DAY_RATES))
            )
            console.print(f"    Resource: {resource.name} @ {format_gbp(resource.day_rate)}/day")
            resources.append(resource)

    for _ in range(NUM_SUPPLIER_RESOURCES):
        resource = repo.create_resource(Resource(name=fake.name(), day_rate=random.choice(DAY_RATES)))
        console.print(f"  Supplier resource: {resource.name}")
        resources.append(resource)

    console.print(f"[green]{len(resources)} resources created.[/green]\n")
    return resources


def _create_activity(repo: ProjectDataRepository, resources: list[Resource]) -> tuple[int, int]:
    console.print("[cyan]Creating timesheets and expenses...[/cyan]")
    start = date.today() - timedelta(days=DAYS_OF_HISTORY)
    timesheet_count = 0
    expense_count = 0

    for resource in resources:
        assert resource.id is not None
        for offset in range(DAYS_OF_HISTORY):
            day = start + timedelta(days=offset)
            if day.weekday() >= 5 or random.random() < 0.2:
                continue
            hours = Decimal(random.choice(["4", "6", "7.5", "8"]))
            repo.add_timesheet(
                TimesheetEntry(resource_id=resource.id, date=day, hours=hours, status=_random_status())
            )
            timesheet_count += 1

            if random.random() < 0.15:
                category, reason, amount = random.choice(EXPENSE_TEMPLATES)
                repo.add_expense(
                    ExpenseEntry(
                        resource_id=resource.id,
                        date=day,
                        amount=amount,
                        category=category,
                        reason=reason,
                        procurement_method=random.choice(list(ProcurementMethod)),
                        chargeable_to_customer=random.random() < 0.7,
                        status="Approved",
                    )
                )
                expense_count += 1

    console.print(f"[green]{timesheet_count} timesheets and {expense_count} expenses created.[/green]\n")
    return timesheet_count, expense_count


def main() -> None:
    initialize_db()
    _clear_all(get_connection())
    repo = get_project_data_repository()

    resources = _create_resources(repo)
    timesheet_count, expense_count = _create_activity(repo, resources)

    table = Table(title="Seed Summary")
    table.add_column("Entity")
    table.add_column("Count", justify="right")
    table.add_row("Partners", str(len(repo.list_partners())))
    table.add_row("Resources", str(len(resources)))
    table.add_row("Timesheets", str(timesheet_count))
    table.add_row("Expenses", str(expense_count))
    console.print(table)


if __name__ == "__main__":
    main()
