from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping

from tracker.models import to_money
from tracker.models.expense import ExpenseEntry, ProcurementMethod
from tracker.models.partner import Partner, Resource
from tracker.models.timesheet import TimesheetEntry, TimesheetStatus
from tracker.repositories.base import ProjectDataRepository

HOURS_PRECISION = Decimal("0.01")


def _to_pence(amount: Decimal) -> int:
    return int(to_money(amount) * 100)


def _from_pence(pence: int | None) -> Decimal:
    return Decimal(pence or 0) / 100


def _to_hours(hours: Decimal) -> Decimal:
    # timesheets.hours is NUMERIC(6, 2)
    return hours.quantize(HOURS_PRECISION, rounding=ROUND_HALF_UP)


def _to_date(value: date | str) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def _in_clause(prefix: str, values: list[int]) -> tuple[str, dict[str, int]]:
    placeholders = ", ".join(f":{prefix}{i}" for i in range(len(values)))
    params = {f"{prefix}{i}": v for i, v in enumerate(values)}
    return placeholders, params


class SQLAlchemyProjectDataRepository(ProjectDataRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    # ---- Partners ----

    def create_partner(self, partner: Partner) -> Partner:
        result = self.conn.execute(
            text("INSERT INTO partners (name, is_active) VALUES (:name, :is_active)"),
            {"name": partner.name, "is_active": partner.is_active},
        )
        partner_id = result.lastrowid
        self.conn.commit()
        created = self.get_partner(partner_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve partner after create (id={partner_id})")
        return created

    @staticmethod
    def _row_to_partner(row: RowMapping) -> Partner:
        return Partner(id=row["id"], name=row["name"], is_active=bool(row["is_active"]))

    def get_partner(self, partner_id: int) -> Partner | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM partners WHERE id = :id"),
                {"id": partner_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_partner(row)

    def list_partners(self, active_only: bool = False) -> list[Partner]:
        sql = "SELECT * FROM partners"
        params: dict[str, bool] = {}
        if active_only:
            sql += " WHERE is_active = :active"
            params["active"] = True
        rows = self.conn.execute(text(sql + " ORDER BY name, id"), params).mappings().fetchall()
        return [self._row_to_partner(row) for row in rows]

    # ---- Resources ----

    def create_resource(self, resource: Resource) -> Resource:
        result = self.conn.execute(
            text("INSERT INTO resources (name, partner_id, day_rate) VALUES (:name, :partner_id, :day_rate)"),
            {
                "name": resource.name,
                "partner_id": resource.partner_id,
                "day_rate": _to_pence(resource.day_rate),
            },
        )
        resource_id = result.lastrowid
        self.conn.commit()
        return resource.model_copy(update={"id": resource_id, "day_rate": to_money(resource.day_rate)})

    def list_resources(self) -> list[Resource]:
        rows = self.conn.execute(text("SELECT * FROM resources ORDER BY name, id")).mappings().fetchall()
        return [
            Resource(
                id=row["id"],
                name=row["name"],
                partner_id=row["partner_id"],
                day_rate=_from_pence(row["day_rate"]),
            )
            for row in rows
        ]

    # ---- Timesheets ----

    def add_timesheet(self, entry: TimesheetEntry) -> TimesheetEntry:
        result = self.conn.execute(
            text(
                "INSERT INTO timesheets (resource_id, date, hours, status) "
                "VALUES (:resource_id, :date, :hours, :status)"
            ),
            {
                "resource_id": entry.resource_id,
                "date": entry.date.isoformat(),
                "hours": str(_to_hours(entry.hours)),
                "status": entry.status.value,
            },
        )
        entry_id = result.lastrowid
        self.conn.commit()
        return entry.model_copy(update={"id": entry_id, "hours": _to_hours(entry.hours)})

    def list_timesheets(self, resource_ids: list[int], start: date, end: date) -> list[TimesheetEntry]:
        if not resource_ids:
            return []
        placeholders, params = _in_clause("rid", resource_ids)
        rows = (
            self.conn.execute(
                text(
                    f"SELECT * FROM timesheets WHERE resource_id IN ({placeholders}) "
                    "AND date >= :start AND date <= :end ORDER BY date, id"
                ),
                {**params, "start": start.isoformat(), "end": end.isoformat()},
            )
            .mappings()
            .fetchall()
        )
        return [
            TimesheetEntry(
                id=row["id"],
                resource_id=row["resource_id"],
                date=_to_date(row["date"]),
                hours=Decimal(str(row["hours"])),
                status=TimesheetStatus(row["status"]),
            )
            for row in rows
        ]

    # ---- Expenses ----

    def add_expense(self, entry: ExpenseEntry) -> ExpenseEntry:
        result = self.conn.execute(
            text(
                "INSERT INTO expenses (resource_id, expense_date, amount, category, reason, "
                "procurement_method, chargeable_to_customer, status) "
                "VALUES (:resource_id, :expense_date, :amount, :category, :reason, "
                ":procurement_method, :chargeable_to_customer, :status)"
            ),
            {
                "resource_id": entry.resource_id,
                "expense_date": entry.date.isoformat(),
                "amount": _to_pence(entry.amount),
                "category": entry.category,
                "reason": entry.reason,
                "procurement_method": entry.procurement_method.value,
                "chargeable_to_customer": entry.chargeable_to_customer,
                "status": entry.status,
            },
        )
        entry_id = result.lastrowid
        self.conn.commit()
        return entry.model_copy(update={"id": entry_id, "amount": to_money(entry.amount)})

    def list_expenses(self, resource_ids: list[int], start: date, end: date) -> list[ExpenseEntry]:
        if not resource_ids:
            return []
        placeholders, params = _in_clause("rid", resource_ids)
        rows = (
            self.conn.execute(
                text(
                    f"SELECT * FROM expenses WHERE resource_id IN ({placeholders}) "
                    "AND expense_date >= :start AND expense_date <= :end ORDER BY expense_date, id"
                ),
                {**params, "start": start.isoformat(), "end": end.isoformat()},
            )
            .mappings()
            .fetchall()
        )
        return [
            ExpenseEntry(
                id=row["id"],
                resource_id=row["resource_id"],
                date=_to_date(row["expense_date"]),
                amount=_from_pence(row["amount"]),
                category=row["category"],
                reason=row["reason"],
                # Rows written before procurement tracking existed were partner-paid
                procurement_method=ProcurementMethod(row["procurement_method"] or ProcurementMethod.PARTNER.value),
                chargeable_to_customer=bool(row["chargeable_to_customer"]),
                status=row["status"],
            )
            for row in rows
        ]
