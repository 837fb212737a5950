"""Logging setup for the restore tool.

Log output goes to stderr so the analysis and summary reports printed on
stdout stay readable. An optional log file always receives JSON lines.
"""

import json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

# Rotation of the optional log file
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

CONSOLE_FORMATS = {
    "simple": ("%(levelname)-8s %(message)s%(context)s", None),
    "detailed": (
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s%(context)s",
        "%Y-%m-%d %H:%M:%S",
    ),
}


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "context_fields", {})


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; log_context() fields are top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain text; appends the fields of the active log_context(), if any."""

    def format(self, record: logging.LogRecord) -> str:
        fields = _context_fields(record)
        record.context = "".join(f" [{key}={value}]" for key, value in fields.items())
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    format: str = "simple",
    log_file: Optional[Path] = None,
) -> None:
    """Configure the root logger for a restore run.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Console format (simple, detailed, json)
        log_file: Optional rotating JSON log file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    if format == "json":
        console_handler.setFormatter(StructuredFormatter())
    else:
        fmt, datefmt = CONSOLE_FORMATS.get(format, CONSOLE_FORMATS["simple"])
        console_handler.setFormatter(ConsoleFormatter(fmt=fmt, datefmt=datefmt))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields (such as the archive name) to every record made in the block.

    Nested blocks add to the outer fields. The previous record factory is
    restored on exit, also when the block raises.
    """
    previous = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = previous(*args, **kwargs)
        record.context_fields = {**_context_fields(record), **fields}
        return record

    logging.setLogRecordFactory(record_factory)
    try:
        yield
    finally:
        logging.setLogRecordFactory(previous)
