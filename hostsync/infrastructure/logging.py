"""
Centralized Logging

Architectural Intent:
- Provides human-readable or structured JSON logging for all hostsync components
- Every run is also appended to a log file so a failed update can be inspected later
- Supports configurable log levels via CLI flags (--verbose, --debug)
"""

import json
import logging
import sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Optional


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    log_file: Optional[str] = None,
    console_level: Optional[int] = None,
) -> Optional[str]:
    """Configure logging for hostsync.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
        log_file: Optional file that receives every record in addition to stderr.
        console_level: Threshold for the stderr handler. Defaults to level.

    Returns:
        The log file actually in use, or None if file logging is off or failed.
    """
    root = logging.getLogger("hostsync")
    root.setLevel(level)

    # Remove existing handlers
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level if console_level is None else console_level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not log_file:
        return None

    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
    except OSError as e:
        root.warning("Cannot write log file %s: %s", log_file, e)
        return None

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    return log_file
