from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from tracker.constants import INVOICE_TYPE_LABELS, LINE_TYPE_LABELS, PROCUREMENT_LABELS
from tracker.errors import InvalidPeriod, SignOffIncomplete, UnknownPartner
from tracker.models import format_gbp
from tracker.models.invoice import InvoicePeriod, InvoiceSummary, InvoiceType
from tracker.models.partner import Partner
from tracker.models.signoff import SignOff, SignOffRole
from tracker.services.invoice_aggregator import current_month_period, make_period, parse_month
from tracker.services.invoice_service import InvoiceService
from tracker.services.signoff_service import SignOffService

console = Console()

MONTH_CHOICE = "A calendar month"
RANGE_CHOICE = "A custom date range"

SIGNATORY_PROMPTS = {
    SignOffRole.SUPPLIER: "Supplier signatory:",
    SignOffRole.CUSTOMER: "Customer signatory:",
}


def _parse_date(value: str) -> date | None:
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidPeriod(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def _ask_period() -> InvoicePeriod | None:
    mode = questionary.select("Invoice period:", choices=[MONTH_CHOICE, RANGE_CHOICE]).ask()
    if mode is None:
        return None

    if mode == MONTH_CHOICE:
        default = current_month_period().start.strftime("%Y-%m")
        while True:
            month = questionary.text("Month (YYYY-MM):", default=default).ask()
            if month is None:
                return None
            try:
                return parse_month(month)
            except InvalidPeriod as e:
                console.print(f"[red]{e}[/red]")

    while True:
        start_str = questionary.text("Start date (YYYY-MM-DD):").ask()
        if start_str is None:
            return None
        end_str = questionary.text("End date (YYYY-MM-DD):").ask()
        if end_str is None:
            return None
        try:
            return make_period(_parse_date(start_str), _parse_date(end_str))
        except InvalidPeriod as e:
            console.print(f"[red]{e}[/red]")


def _ask_invoice_type() -> InvoiceType | None:
    labels = {label: invoice_type for invoice_type, label in INVOICE_TYPE_LABELS.items()}
    choice = questionary.select("Invoice type:", choices=list(labels)).ask()
    if choice is None:
        return None
    return labels[choice]


def show_invoice_summary(summary: InvoiceSummary) -> None:
    """Print every line item, grouped by resource, followed by the totals."""
    console.print()
    title = summary.partner_name or f"Partner {summary.partner_id}"
    console.print(f"[bold]{title}[/bold] - {summary.period.label}", style="cyan")
    console.print(f"  {INVOICE_TYPE_LABELS[summary.invoice_type]}")

    if summary.is_empty:
        console.print("[yellow]No billable activity in this period.[/yellow]")

    for group in summary.groups:
        table = Table(title=f"{group.resource_name} ({format_gbp(group.day_rate)}/day)")
        table.add_column("Date")
        table.add_column("Type")
        table.add_column("Description")
        table.add_column("Qty", justify="right")
        table.add_column("Amount", justify="right")
        table.add_column("Notes")

        for line in group.lines:
            notes = []
            if line.source_status:
                notes.append(line.source_status)
            if line.procurement_method is not None:
                notes.append(f"paid by {PROCUREMENT_LABELS[line.procurement_method].lower()}")
                notes.append("chargeable" if line.chargeable_to_customer else "not chargeable")
            if line.excluded_from_total:
                notes.append("[yellow]excluded from total[/yellow]")
            table.add_row(
                line.line_date.isoformat(),
                LINE_TYPE_LABELS[line.line_type],
                line.description,
                f"{line.quantity.normalize():f}",
                format_gbp(line.line_total),
                ", ".join(notes),
            )
        console.print(table)
        console.print(
            f"  Hours: {group.timesheet_hours.normalize():f}  "
            f"Timesheets: {format_gbp(group.timesheet_value)}  "
            f"Expenses: {format_gbp(group.expense_total)}"
        )

    totals = Table(title="Totals", show_header=False)
    totals.add_column("Item")
    totals.add_column("Amount", justify="right")
    totals.add_row("Timesheets", format_gbp(summary.timesheet_total))
    totals.add_row("Expenses (all)", format_gbp(summary.total_expenses))
    totals.add_row("  Chargeable to customer", format_gbp(summary.expenses_billable))
    totals.add_row("  Not chargeable", format_gbp(summary.expenses_non_billable))
    totals.add_row("  Paid by partner", format_gbp(summary.expenses_paid_by_partner))
    totals.add_row("  Paid by supplier (excluded)", format_gbp(summary.expenses_paid_by_supplier))
    totals.add_row("Chargeable total", format_gbp(summary.chargeable_total))
    totals.add_row("[bold]Invoice total[/bold]", f"[bold]{format_gbp(summary.invoice_total)}[/bold]")
    console.print(totals)

    for warning in summary.warnings:
        console.print(f"[yellow]Warning: {warning.message}[/yellow]")


def _choose_partner(partners: list[Partner]) -> Partner | None:
    choices = [questionary.Choice(title=p.name, value=p) for p in partners]
    choices.append(questionary.Choice(title="Back", value=None))
    return questionary.select("Partner:", choices=choices).ask()


def _collect_signoff(signoff_service: SignOffService) -> SignOff:
    """Ask each party for a signature; a blank or cancelled answer leaves that role unsigned."""
    signoff = SignOff()
    for role, prompt in SIGNATORY_PROMPTS.items():
        signer = questionary.text(prompt).ask()
        if signer and signer.strip():
            signoff = signoff_service.sign(signoff, role, signer.strip())
    return signoff


def generate_invoice_menu(invoice_service: InvoiceService, signoff_service: SignOffService) -> None:
    console.print()
    console.print("[bold]Generate Partner Invoice[/bold]", style="cyan")

    partners = invoice_service.list_partners()
    if not partners:
        console.print("[yellow]No active partners found.[/yellow]")
        return

    partner = _choose_partner(partners)
    if partner is None or partner.id is None:
        return

    period = _ask_period()
    if period is None:
        return

    invoice_type = _ask_invoice_type()
    if invoice_type is None:
        return

    try:
        summary = invoice_service.generate_invoice(partner.id, period.start, period.end, invoice_type)
    except UnknownPartner:
        console.print(f"[red]{partner.name} has no resources linked to it.[/red]")
        return

    show_invoice_summary(summary)

    if not questionary.confirm("Export to CSV?", default=False).ask():
        return

    signoff = _collect_signoff(signoff_service)
    try:
        signoff_service.require_signed(signoff)
    except SignOffIncomplete as e:
        console.print(f"[yellow]Export skipped. {e}[/yellow]")
        return

    path = invoice_service.export_csv(summary)
    console.print(f"[green]Exported to {path}[/green]")


def list_partners_menu(invoice_service: InvoiceService) -> None:
    partners = invoice_service.list_partners(active_only=False)
    if not partners:
        console.print("[yellow]No partners found.[/yellow]")
        return

    table = Table(title="Partners")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Active", justify="center")
    for p in partners:
        table.add_row(str(p.id), p.name, "yes" if p.is_active else "no")
    console.print(table)
