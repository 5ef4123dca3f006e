"""Partner invoice aggregation.

Turns the candidate timesheets and expenses of a project into an
``InvoiceSummary`` for one partner and one period. The computation is pure:
inputs are never mutated and identical inputs produce identical output.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import assert_never

from tracker.constants import UK_TZ
from tracker.errors import InvalidPeriod, UnknownPartner
from tracker.models import to_money
from tracker.models.expense import ExpenseEntry, ProcurementMethod
from tracker.models.invoice import (
    ZERO,
    DataIntegrityWarning,
    InvoiceLine,
    InvoiceLineType,
    InvoicePeriod,
    InvoiceSummary,
    InvoiceType,
    ResourceGroup,
)
from tracker.models.partner import Resource
from tracker.models.timesheet import TimesheetEntry, TimesheetStatus

logger = logging.getLogger(__name__)

DEFAULT_HOURS_PER_DAY = 8


def make_period(start: date | None, end: date | None) -> InvoicePeriod:
    if start is None or end is None:
        raise InvalidPeriod("Both period start and end dates are required")
    if isinstance(start, datetime) or isinstance(end, datetime):
        raise InvalidPeriod("Period bounds must be calendar dates without a time of day")
    if start > end:
        raise InvalidPeriod(f"Period start {start.isoformat()} is after period end {end.isoformat()}")
    return InvoicePeriod(start=start, end=end)


def month_period(year: int, month: int) -> InvoicePeriod:
    if not 1 <= month <= 12:
        raise InvalidPeriod(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return InvoicePeriod(start=date(year, month, 1), end=date(year, month, last_day))


def parse_month(ref: str) -> InvoicePeriod:
    """Parse 'YYYY-MM' into the period covering that whole month."""
    ref = (ref or "").strip()
    if len(ref) != 7 or ref[4] != "-":
        raise InvalidPeriod(f"Invalid month '{ref}', expected YYYY-MM")
    try:
        year = int(ref[:4])
        month = int(ref[5:])
    except ValueError:
        raise InvalidPeriod(f"Invalid month '{ref}', expected YYYY-MM") from None
    return month_period(year, month)


def current_month_period() -> InvoicePeriod:
    today = datetime.now(UK_TZ).date()
    return month_period(today.year, today.month)


def _status_is_invoiceable(status: TimesheetStatus, include_submitted: bool) -> bool:
    if status is TimesheetStatus.VALIDATED:
        return True
    elif status is TimesheetStatus.SUBMITTED:
        return include_submitted
    elif status is TimesheetStatus.DRAFT:
        return False
    elif status is TimesheetStatus.REJECTED:
        return False
    else:
        assert_never(status)


def _expense_line_type(method: ProcurementMethod) -> InvoiceLineType:
    if method is ProcurementMethod.PARTNER:
        return InvoiceLineType.PARTNER_EXPENSE
    elif method is ProcurementMethod.SUPPLIER:
        return InvoiceLineType.SUPPLIER_EXPENSE
    else:
        assert_never(method)


def _format_hours(hours: Decimal) -> str:
    return f"{hours.normalize():f}"


class _Collector:
    """Mutable scratch state for one aggregation run."""

    def __init__(self, partner_id: int, resources: Mapping[int, Resource]) -> None:
        self.partner_id = partner_id
        self.resources = resources
        self.warnings: list[DataIntegrityWarning] = []
        self.groups: dict[int, ResourceGroup] = {}
        self._seen: set[tuple[str, int]] = set()
        self._orphans: set[tuple[str, int]] = set()

    def owned_resource(self, entry_type: str, entry_id: int, resource_id: int) -> Resource | None:
        """Return the entry's resource when it belongs to the partner, recording integrity warnings."""
        resource = self.resources.get(resource_id)
        if resource is None:
            key = (entry_type, entry_id)
            if key in self._orphans:
                return None
            self._orphans.add(key)
            self.warnings.append(
                DataIntegrityWarning(
                    entry_type=entry_type,
                    entry_id=entry_id,
                    resource_id=resource_id,
                    reason="unknown_resource",
                )
            )
            logger.warning("%s %s references unknown resource %s, excluded", entry_type, entry_id, resource_id)
            return None
        if resource.partner_id != self.partner_id:
            return None
        return resource

    def first_sighting(self, entry_type: str, entry_id: int, resource_id: int) -> bool:
        key = (entry_type, entry_id)
        if key in self._seen:
            self.warnings.append(
                DataIntegrityWarning(
                    entry_type=entry_type,
                    entry_id=entry_id,
                    resource_id=resource_id,
                    reason="duplicate_entry",
                )
            )
            logger.warning("%s %s appears more than once, counted once", entry_type, entry_id)
            return False
        self._seen.add(key)
        return True

    def group_for(self, resource_id: int, resource: Resource) -> ResourceGroup:
        group = self.groups.get(resource_id)
        if group is None:
            group = ResourceGroup(
                resource_id=resource_id,
                resource_name=resource.name,
                day_rate=resource.day_rate,
                hours_by_status={},
                timesheet_lines=[],
                expense_lines=[],
            )
            self.groups[resource_id] = group
        return group


def generate_invoice(
    partner_id: int,
    period_start: date | None,
    period_end: date | None,
    timesheets: Iterable[TimesheetEntry],
    expenses: Iterable[ExpenseEntry],
    resources: Mapping[int, Resource],
    *,
    invoice_type: InvoiceType = InvoiceType.COMBINED,
    include_submitted: bool = True,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
    partner_name: str = "",
) -> InvoiceSummary:
    """Aggregate a partner's timesheets and expenses for a period into an invoice.

    ``timesheets`` and ``expenses`` are the full candidate sets; filtering by
    date, partner ownership and timesheet status happens here. Entries that
    reference a resource missing from ``resources`` are excluded and reported
    in ``InvoiceSummary.warnings``.

    Raises ``InvalidPeriod`` for a missing or inverted range and
    ``UnknownPartner`` when no resource in ``resources`` belongs to
    ``partner_id``.
    """
    period = make_period(period_start, period_end)
    if hours_per_day <= 0:
        raise ValueError("hours_per_day must be positive")
    if not any(r.partner_id == partner_id for r in resources.values()):
        raise UnknownPartner(partner_id)

    collector = _Collector(partner_id, resources)
    days_divisor = Decimal(hours_per_day)

    if invoice_type.includes_timesheets:
        for ts in timesheets:
            if ts.id is None:
                raise ValueError("Cannot invoice a timesheet without an id")
            resource = collector.owned_resource("timesheet", ts.id, ts.resource_id)
            if resource is None or not period.contains(ts.date):
                continue
            if not _status_is_invoiceable(ts.status, include_submitted):
                continue
            if not collector.first_sighting("timesheet", ts.id, ts.resource_id):
                continue

            hourly_rate = resource.hourly_rate(hours_per_day)
            value = to_money(ts.hours * hourly_rate)
            days = ts.hours / days_divisor
            group = collector.group_for(ts.resource_id, resource)
            group.timesheet_hours += ts.hours
            group.timesheet_value += value
            status_key = ts.status.value
            group.hours_by_status[status_key] = group.hours_by_status.get(status_key, ZERO) + ts.hours
            group.timesheet_lines.append(
                InvoiceLine(
                    line_type=InvoiceLineType.TIMESHEET,
                    source_id=ts.id,
                    resource_id=ts.resource_id,
                    resource_name=resource.name,
                    line_date=ts.date,
                    description=f"{resource.name} - {_format_hours(ts.hours)}h ({days:.2f} days)",
                    quantity=ts.hours,
                    unit_price=to_money(hourly_rate),
                    line_total=value,
                    source_status=status_key,
                    chargeable_to_customer=True,
                )
            )

    if invoice_type.includes_expenses:
        for exp in expenses:
            if exp.id is None:
                raise ValueError("Cannot invoice an expense without an id")
            resource = collector.owned_resource("expense", exp.id, exp.resource_id)
            if resource is None or not period.contains(exp.date):
                continue
            if not collector.first_sighting("expense", exp.id, exp.resource_id):
                continue

            amount = to_money(exp.amount)
            description = f"{resource.name} - {exp.category}"
            if exp.reason:
                description = f"{description}: {exp.reason}"
            group = collector.group_for(exp.resource_id, resource)
            group.expense_total += amount
            group.expense_lines.append(
                InvoiceLine(
                    line_type=_expense_line_type(exp.procurement_method),
                    source_id=exp.id,
                    resource_id=exp.resource_id,
                    resource_name=resource.name,
                    line_date=exp.date,
                    description=description,
                    quantity=Decimal("1"),
                    unit_price=amount,
                    line_total=amount,
                    source_status=exp.status,
                    chargeable_to_customer=exp.chargeable_to_customer,
                    procurement_method=exp.procurement_method,
                    expense_category=exp.category,
                )
            )

    groups = sorted(collector.groups.values(), key=lambda g: (g.resource_name, g.resource_id))
    for group in groups:
        group.timesheet_lines.sort(key=lambda line: (line.line_date, line.source_id))
        group.expense_lines.sort(key=lambda line: (line.line_date, line.source_id))
        group.hours_by_status = dict(sorted(group.hours_by_status.items()))

    timesheet_hours = ZERO
    timesheet_total = ZERO
    billable = ZERO
    non_billable = ZERO
    paid_by_partner = ZERO
    paid_by_supplier = ZERO
    for group in groups:
        timesheet_hours += group.timesheet_hours
        timesheet_total += group.timesheet_value
        for line in group.expense_lines:
            if line.chargeable_to_customer:
                billable += line.line_total
            else:
                non_billable += line.line_total
            if line.line_type == InvoiceLineType.PARTNER_EXPENSE:
                paid_by_partner += line.line_total
            else:
                paid_by_supplier += line.line_total

    summary = InvoiceSummary(
        partner_id=partner_id,
        partner_name=partner_name,
        period=period,
        invoice_type=invoice_type,
        include_submitted=include_submitted,
        timesheet_hours=timesheet_hours,
        timesheet_total=timesheet_total,
        total_expenses=billable + non_billable,
        expenses_billable=billable,
        expenses_non_billable=non_billable,
        expenses_paid_by_partner=paid_by_partner,
        expenses_paid_by_supplier=paid_by_supplier,
        chargeable_total=timesheet_total + billable,
        invoice_total=timesheet_total + paid_by_partner,
        groups=groups,
        warnings=sorted(collector.warnings, key=lambda w: (w.entry_type, w.entry_id, w.reason)),
    )
    logger.info(
        "Invoice generated: partner=%s, period=%s, type=%s, lines=%d, total=%s",
        partner_id,
        period.label,
        invoice_type.value,
        summary.line_count,
        summary.invoice_total,
    )
    return summary
