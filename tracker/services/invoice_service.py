from __future__ import annotations

import logging
import os
from datetime import date

from tracker.errors import UnknownPartner
from tracker.export.csv_export import export_filename, summary_to_csv
from tracker.models.invoice import InvoiceSummary, InvoiceType
from tracker.models.partner import Partner
from tracker.repositories.base import ProjectDataRepository
from tracker.services.invoice_aggregator import generate_invoice, make_period
from tracker.settings import settings

logger = logging.getLogger(__name__)


class InvoiceService:
    def __init__(self, project_repo: ProjectDataRepository) -> None:
        self.project_repo = project_repo

    def list_partners(self, active_only: bool = True) -> list[Partner]:
        result = self.project_repo.list_partners(active_only=active_only)
        logger.debug("Listed %d partners (active_only=%s)", len(result), active_only)
        return result

    def get_partner(self, partner_id: int) -> Partner | None:
        result = self.project_repo.get_partner(partner_id)
        logger.debug("get_partner id=%s found=%s", partner_id, result is not None)
        return result

    def generate_invoice(
        self,
        partner_id: int,
        period_start: date | None,
        period_end: date | None,
        invoice_type: InvoiceType = InvoiceType.COMBINED,
        include_submitted: bool | None = None,
    ) -> InvoiceSummary:
        """Fetch the partner's candidate entries and aggregate them into a summary."""
        period = make_period(period_start, period_end)
        partner = self.project_repo.get_partner(partner_id)
        if partner is None:
            raise UnknownPartner(partner_id)
        if include_submitted is None:
            include_submitted = settings.include_submitted_timesheets

        resources = {r.id: r for r in self.project_repo.list_resources() if r.id is not None}
        partner_resource_ids = [rid for rid, r in resources.items() if r.partner_id == partner_id]

        timesheets = []
        if invoice_type.includes_timesheets:
            timesheets = self.project_repo.list_timesheets(partner_resource_ids, period.start, period.end)
        expenses = []
        if invoice_type.includes_expenses:
            expenses = self.project_repo.list_expenses(partner_resource_ids, period.start, period.end)
        logger.debug(
            "Fetched %d timesheets and %d expenses for partner=%s period=%s",
            len(timesheets),
            len(expenses),
            partner_id,
            period.label,
        )

        return generate_invoice(
            partner_id,
            period.start,
            period.end,
            timesheets,
            expenses,
            resources,
            invoice_type=invoice_type,
            include_submitted=include_submitted,
            hours_per_day=settings.hours_per_day,
            partner_name=partner.name,
        )

    def export_csv(self, summary: InvoiceSummary, directory: str | None = None) -> str:
        """Write the summary as CSV and return the file path."""
        directory = directory or settings.export_dir
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, export_filename(summary))
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(summary_to_csv(summary))
        logger.info("Invoice CSV exported to %s (%d lines)", path, summary.line_count)
        return path
