import logging
import sys

from tracker.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Libraries that log every statement or migration step at INFO.
QUIET_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration")

logger = logging.getLogger(__name__)


def configure_logging(announce: bool = True) -> None:
    """Install a single stderr handler on the root logger.

    Output is plain text unless ``TRACKER_LOG_JSON`` is set. With ``announce``
    the invoicing settings in effect are logged at INFO.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt=JSON_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level"},
                static_fields={"app": "tracker"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if announce:
        logger.info(
            "Invoicing settings: hours_per_day=%s, include_submitted_timesheets=%s, export_dir=%s",
            settings.hours_per_day,
            settings.include_submitted_timesheets,
            settings.export_dir,
        )


def reconfigure() -> None:
    """Restore our handlers after Alembic's ``fileConfig`` has replaced them."""
    configure_logging(announce=False)
