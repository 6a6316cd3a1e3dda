"""Logging configuration for the blockfields preview app.

The Textual app owns the terminal while it runs, so records go to a
rotating JSON log file, or nowhere when no file is configured.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'WARN': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the caller's ``extra`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        entry.update({key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS})
        return json.dumps(entry, default=str)


def parse_log_level(level_name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` or ``"WARN"`` to a logging level."""
    if not level_name:
        return default
    return LEVELS.get(level_name.upper(), default)


def get_log_level_from_env() -> int:
    """Level from BLOCKFIELDS_LOG_LEVEL, then LOG_LEVEL (default INFO)."""
    return parse_log_level(os.environ.get('BLOCKFIELDS_LOG_LEVEL') or os.environ.get('LOG_LEVEL'))


def setup_logging(level: Optional[int] = None, log_file: Optional[Path] = None) -> None:
    """
    Route all logging to a rotating JSON file.

    Args:
        level: Logging level (defaults to the environment, then INFO)
        log_file: Log file path (defaults to BLOCKFIELDS_LOG_FILE); without
            one, records are discarded

    Example:
        >>> setup_logging(logging.DEBUG, Path('logs/blockfields.log'))
    """
    if level is None:
        level = get_log_level_from_env()
    if log_file is None and os.environ.get('BLOCKFIELDS_LOG_FILE'):
        log_file = Path(os.environ['BLOCKFIELDS_LOG_FILE'])

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if log_file is None:
        root_logger.addHandler(logging.NullHandler())
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    # 1MB per file, 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1024 * 1024, backupCount=3, encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)
