from zoneinfo import ZoneInfo

from tracker.models.expense import ProcurementMethod
from tracker.models.invoice import InvoiceLineType, InvoiceType

UK_TZ = ZoneInfo("Europe/London")

PROCUREMENT_LABELS = {
    ProcurementMethod.SUPPLIER: "Supplier",
    ProcurementMethod.PARTNER: "Partner",
}

LINE_TYPE_LABELS = {
    InvoiceLineType.TIMESHEET: "Timesheet",
    InvoiceLineType.PARTNER_EXPENSE: "Partner expense",
    InvoiceLineType.SUPPLIER_EXPENSE: "Supplier expense",
}

INVOICE_TYPE_LABELS = {
    InvoiceType.COMBINED: "Combined (Timesheets & Expenses)",
    InvoiceType.TIMESHEETS: "Timesheets Only",
    InvoiceType.EXPENSES: "Expenses Only",
}
