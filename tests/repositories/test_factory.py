from unittest.mock import MagicMock, patch

from tracker.repositories.factory import get_project_data_repository
from tracker.repositories.sqlalchemy import SQLAlchemyProjectDataRepository


class TestFactory:
    @patch("tracker.db.get_connection")
    def test_get_project_data_repository(self, mock_conn):
        mock_conn.return_value = MagicMock()
        repo = get_project_data_repository()
        assert isinstance(repo, SQLAlchemyProjectDataRepository)
        assert repo.conn is mock_conn.return_value
