from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from tracker.models.expense import ProcurementMethod

ZERO = Decimal("0.00")


class InvoiceType(str, Enum):
    COMBINED = "combined"
    TIMESHEETS = "timesheets"
    EXPENSES = "expenses"

    @property
    def includes_timesheets(self) -> bool:
        return self in (InvoiceType.COMBINED, InvoiceType.TIMESHEETS)

    @property
    def includes_expenses(self) -> bool:
        return self in (InvoiceType.COMBINED, InvoiceType.EXPENSES)


class InvoiceLineType(str, Enum):
    TIMESHEET = "timesheet"
    PARTNER_EXPENSE = "expense"
    SUPPLIER_EXPENSE = "supplier_expense"


class InvoicePeriod(BaseModel):
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


class InvoiceLine(BaseModel):
    line_type: InvoiceLineType
    source_id: int
    resource_id: int
    resource_name: str
    line_date: date
    description: str
    quantity: Decimal  # hours for timesheets, 1 for expenses
    unit_price: Decimal
    line_total: Decimal
    source_status: str = ""
    chargeable_to_customer: bool = True
    procurement_method: ProcurementMethod | None = None
    expense_category: str | None = None

    @property
    def excluded_from_total(self) -> bool:
        return self.line_type == InvoiceLineType.SUPPLIER_EXPENSE


class ResourceGroup(BaseModel):
    resource_id: int
    resource_name: str
    day_rate: Decimal
    timesheet_hours: Decimal = ZERO
    timesheet_value: Decimal = ZERO
    hours_by_status: dict[str, Decimal] = {}
    expense_total: Decimal = ZERO
    timesheet_lines: list[InvoiceLine] = []
    expense_lines: list[InvoiceLine] = []

    @property
    def lines(self) -> list[InvoiceLine]:
        return [*self.timesheet_lines, *self.expense_lines]


class DataIntegrityWarning(BaseModel):
    entry_type: str  # 'timesheet' | 'expense'
    entry_id: int
    resource_id: int
    reason: str  # 'unknown_resource' | 'duplicate_entry'

    @property
    def message(self) -> str:
        if self.reason == "unknown_resource":
            return f"{self.entry_type} {self.entry_id} references unknown resource {self.resource_id}; excluded"
        if self.reason == "duplicate_entry":
            return f"{self.entry_type} {self.entry_id} appears more than once; counted once"
        return f"{self.entry_type} {self.entry_id}: {self.reason}"


class InvoiceSummary(BaseModel):
    """Invoice for one partner over one period.

    Computed on demand and never persisted. ``invoice_total`` is what the
    partner is paid: timesheets plus partner-procured expenses. Supplier
    procured expenses are listed for customer billing but excluded from it.
    """

    partner_id: int
    partner_name: str = ""
    period: InvoicePeriod
    invoice_type: InvoiceType = InvoiceType.COMBINED
    include_submitted: bool = True
    timesheet_hours: Decimal = ZERO
    timesheet_total: Decimal = ZERO
    total_expenses: Decimal = ZERO
    expenses_billable: Decimal = ZERO
    expenses_non_billable: Decimal = ZERO
    expenses_paid_by_partner: Decimal = ZERO
    expenses_paid_by_supplier: Decimal = ZERO
    chargeable_total: Decimal = ZERO
    invoice_total: Decimal = ZERO
    groups: list[ResourceGroup] = []
    warnings: list[DataIntegrityWarning] = []

    @property
    def lines(self) -> list[InvoiceLine]:
        return [line for group in self.groups for line in group.lines]

    @property
    def timesheet_lines(self) -> list[InvoiceLine]:
        return [line for line in self.lines if line.line_type == InvoiceLineType.TIMESHEET]

    @property
    def partner_expense_lines(self) -> list[InvoiceLine]:
        return [line for line in self.lines if line.line_type == InvoiceLineType.PARTNER_EXPENSE]

    @property
    def supplier_expense_lines(self) -> list[InvoiceLine]:
        return [line for line in self.lines if line.line_type == InvoiceLineType.SUPPLIER_EXPENSE]

    @property
    def line_count(self) -> int:
        return sum(len(group.lines) for group in self.groups)

    @property
    def is_empty(self) -> bool:
        return not self.groups
