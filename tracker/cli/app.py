import questionary
from rich.console import Console

from tracker.cli.invoice_menu import generate_invoice_menu, list_partners_menu
from tracker.repositories.factory import get_project_data_repository
from tracker.services.invoice_service import InvoiceService
from tracker.services.signoff_service import SignOffService

console = Console()


def _build_services() -> tuple[InvoiceService, SignOffService]:
    return InvoiceService(get_project_data_repository()), SignOffService()


def main_menu() -> None:
    invoice_service, signoff_service = _build_services()

    console.print()
    console.print("[bold]AMSF001 Partner Invoicing[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Generate Partner Invoice",
                "List Partners",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Generate Partner Invoice":
            generate_invoice_menu(invoice_service, signoff_service)
        elif choice == "List Partners":
            list_partners_menu(invoice_service)
