import logging
from logging.config import dictConfig
from typing import Literal

try:
    # python-json-logger is only needed when log_json is switched on.
    from pythonjsonlogger import jsonlogger  # type: ignore  # noqa: F401

    JSON_FORMATTER_CLASS = "pythonjsonlogger.jsonlogger.JsonFormatter"
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    JSON_FORMATTER_CLASS = None

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def configure_logging(level: LogLevel = "INFO", json_output: bool = False) -> None:
    """Send apartment manager logs to stderr, as text lines or JSON records."""
    use_json = json_output and JSON_FORMATTER_CLASS is not None
    formatter = (
        {"class": JSON_FORMATTER_CLASS, "format": "%(asctime)s %(levelname)s %(name)s %(message)s"}
        if use_json
        else {"format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s"}
    )

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"records": formatter},
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "records",
                }
            },
            "root": {"handlers": ["stderr"], "level": level.upper()},
        }
    )

    # Statement logging from SQLAlchemy only at DEBUG.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if level.upper() == "DEBUG" else logging.WARNING)
