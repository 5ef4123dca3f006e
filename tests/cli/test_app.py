from unittest.mock import MagicMock, patch


def _services():
    return MagicMock(), MagicMock()


class TestBuildServices:
    @patch("tracker.cli.app.get_project_data_repository")
    def test_returns_services(self, mock_repo):
        from tracker.cli.app import _build_services
        from tracker.services.invoice_service import InvoiceService
        from tracker.services.signoff_service import SignOffService

        invoice_service, signoff_service = _build_services()
        assert isinstance(invoice_service, InvoiceService)
        assert invoice_service.project_repo is mock_repo.return_value
        assert isinstance(signoff_service, SignOffService)


class TestMainMenu:
    @patch("tracker.cli.app._build_services")
    @patch("tracker.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from tracker.cli.app import main_menu

        mock_build.return_value = _services()
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called()

    @patch("tracker.cli.app._build_services")
    @patch("tracker.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from tracker.cli.app import main_menu

        mock_build.return_value = _services()
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("tracker.cli.app.generate_invoice_menu")
    @patch("tracker.cli.app._build_services")
    @patch("tracker.cli.app.questionary")
    def test_generate_invoice(self, mock_q, mock_build, mock_generate):
        from tracker.cli.app import main_menu

        invoice_service, signoff_service = _services()
        mock_build.return_value = (invoice_service, signoff_service)
        mock_q.select.return_value.ask.side_effect = ["Generate Partner Invoice", "Exit"]

        main_menu()
        mock_generate.assert_called_once_with(invoice_service, signoff_service)

    @patch("tracker.cli.app.list_partners_menu")
    @patch("tracker.cli.app._build_services")
    @patch("tracker.cli.app.questionary")
    def test_list_partners(self, mock_q, mock_build, mock_list):
        from tracker.cli.app import main_menu

        invoice_service, signoff_service = _services()
        mock_build.return_value = (invoice_service, signoff_service)
        mock_q.select.return_value.ask.side_effect = ["List Partners", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(invoice_service)
