from unittest.mock import MagicMock, patch

from sqlalchemy import text

import tracker.db as db_module


class TestGetEngine:
    def test_creates_engine(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()
            assert engine is not None
            assert db_module._engine is engine

    def test_sqlite_enforces_foreign_keys(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()

        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar_one() == 1
        engine.dispose()

    def test_returns_cached_engine(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_engine", sentinel)
        assert db_module.get_engine() is sentinel


class TestConnection:
    def test_creates_connection(self, monkeypatch):
        monkeypatch.setattr(db_module, "_connection", None)
        mock_engine = MagicMock()
        with patch.object(db_module, "get_engine", return_value=mock_engine):
            conn = db_module.get_connection()
            assert conn is mock_engine.connect.return_value

    def test_returns_cached_connection(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_connection", sentinel)
        assert db_module.get_connection() is sentinel

    def test_close_connection(self, monkeypatch):
        conn = MagicMock()
        monkeypatch.setattr(db_module, "_connection", conn)
        db_module.close_connection()
        conn.close.assert_called_once()
        assert db_module._connection is None

    def test_close_without_connection(self, monkeypatch):
        monkeypatch.setattr(db_module, "_connection", None)
        db_module.close_connection()
        assert db_module._connection is None


class TestAlembicConfig:
    def test_points_at_project_scripts(self):
        cfg = db_module._get_alembic_config()
        assert cfg.get_main_option("script_location").endswith("alembic")


class TestInitializeDb:
    @patch("tracker.db.command")
    @patch("tracker.db._get_alembic_config")
    def test_calls_alembic_upgrade(self, mock_config, mock_command):
        mock_cfg = MagicMock()
        mock_config.return_value = mock_cfg
        db_module.initialize_db()
        mock_command.upgrade.assert_called_once_with(mock_cfg, "head")
