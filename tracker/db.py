import logging
import os

from alembic.config import Config
from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine, make_url

from alembic import command
from tracker.settings import settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_connection: Connection | None = None

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        url = make_url(settings.db_url)
        _engine = create_engine(url, pool_pre_ping=True, pool_recycle=1800)
        if url.get_backend_name() == "sqlite":
            # resources.partner_id and the entry tables' resource_id rely on it
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return _engine


def get_connection() -> Connection:
    """Shared connection for the interactive menu and the seed script."""
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Tracker DB connection opened")
    return _connection


def close_connection() -> None:
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None
        logger.debug("Tracker DB connection closed")


def _get_alembic_config() -> Config:
    ini_path = os.path.join(PROJECT_ROOT, "alembic.ini")
    if not os.path.exists(ini_path):
        ini_path = os.path.join(os.getcwd(), "alembic.ini")
    cfg = Config(ini_path)
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "alembic"))
    return cfg


def initialize_db() -> None:
    """Bring the partners/resources/timesheets/expenses schema up to date."""
    logger.info("Upgrading tracker schema to head")
    command.upgrade(_get_alembic_config(), "head")
    logger.info("Tracker schema is current")
