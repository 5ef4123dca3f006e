from __future__ import annotations

import csv
import io

from tracker.constants import INVOICE_TYPE_LABELS, LINE_TYPE_LABELS, PROCUREMENT_LABELS
from tracker.models.invoice import InvoiceSummary

LINE_COLUMNS = [
    "Type",
    "Resource",
    "Date",
    "Description",
    "Quantity",
    "Unit Price",
    "Line Total",
    "Status",
    "Chargeable",
    "Paid By",
    "Category",
    "Excluded",
]


def export_filename(summary: InvoiceSummary) -> str:
    period = summary.period
    return f"invoice-partner{summary.partner_id}-{period.start.isoformat()}-{period.end.isoformat()}.csv"


def summary_to_csv(summary: InvoiceSummary) -> str:
    """Serialize a summary: a block of totals, a blank row, then every line item."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow(["Partner", summary.partner_name or summary.partner_id])
    writer.writerow(["Period Start", summary.period.start.isoformat()])
    writer.writerow(["Period End", summary.period.end.isoformat()])
    writer.writerow(["Invoice Type", INVOICE_TYPE_LABELS[summary.invoice_type]])
    writer.writerow(["Timesheet Hours", summary.timesheet_hours])
    writer.writerow(["Timesheet Total", summary.timesheet_total])
    writer.writerow(["Total Expenses", summary.total_expenses])
    writer.writerow(["Chargeable Expenses", summary.expenses_billable])
    writer.writerow(["Non-chargeable Expenses", summary.expenses_non_billable])
    writer.writerow(["Partner-paid Expenses", summary.expenses_paid_by_partner])
    writer.writerow(["Supplier-paid Expenses (excluded)", summary.expenses_paid_by_supplier])
    writer.writerow(["Chargeable Total", summary.chargeable_total])
    writer.writerow(["Invoice Total", summary.invoice_total])
    writer.writerow([])

    writer.writerow(LINE_COLUMNS)
    for line in summary.lines:
        writer.writerow(
            [
                LINE_TYPE_LABELS[line.line_type],
                line.resource_name,
                line.line_date.isoformat(),
                line.description,
                line.quantity,
                line.unit_price,
                line.line_total,
                line.source_status,
                "yes" if line.chargeable_to_customer else "no",
                PROCUREMENT_LABELS[line.procurement_method] if line.procurement_method else "",
                line.expense_category or "",
                "yes" if line.excluded_from_total else "no",
            ]
        )
    return buf.getvalue()
