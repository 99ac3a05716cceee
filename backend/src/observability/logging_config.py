"""Logging setup for the API process and the Celery workers.

Provides centralized logging setup with JSON formatting. Correlation fields
are taken from the record's ``extra`` (see WorkContext.log_extra).
"""

import logging
import json
import sys
from datetime import datetime, timezone

CORRELATION_FIELDS = (
    "request_id",
    "correlation_id",
    "transaction_id",
    "file_id",
    "business_area_cd",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with the correlation fields at top level."""

    def format(self, record: logging.LogRecord) -> str:
        """Render the record and any correlation fields as JSON.

        Args:
            record: Record, possibly carrying WorkContext extras

        Returns:
            str: Single-line JSON document
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for field in CORRELATION_FIELDS:
            value = getattr(record, field, None)
            if value:
                log_data[field] = str(value)

        # Failures carry the error text separately from the traceback
        if record.exc_info:
            log_data["error"] = str(record.exc_info[1])
            log_data["traceback"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class PlainFormatter(logging.Formatter):
    """Human-readable format with correlation fields appended."""

    def __init__(self):
        super().__init__("%(asctime)s - %(levelname)s - %(name)s.%(funcName)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tags = [
            f"{field}={getattr(record, field)}"
            for field in CORRELATION_FIELDS
            if getattr(record, field, None)
        ]
        return f"{message} [{' '.join(tags)}]" if tags else message


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Level name, e.g. INFO
        json_format: JSONFormatter when True, PlainFormatter otherwise
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Celery and uvicorn may have installed handlers already
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(JSONFormatter() if json_format else PlainFormatter())
    root_logger.addHandler(handler)

    # Transport libraries log every request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("paramiko").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Usually the calling module's __name__

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
