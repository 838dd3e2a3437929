"""Structured logging configuration for the Document Key-Term Viewer."""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Document context passed via logger.info(..., extra={"document": {...}})
        if hasattr(record, "document"):
            log_data["document"] = record.document

        return json.dumps(log_data)

def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Set up root logging.

    Args:
        log_level: Name of the level, e.g. "INFO" or "DEBUG"
        log_format: "json" for one JSON object per line, anything else for plain text
    """
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level))
    root_logger.handlers = [handler]
