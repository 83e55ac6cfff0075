"""
Structured operation logging for the closure registry.
Every record, validation, storage and export event goes through one logger.
"""

import logging
import os
from typing import Any, Dict, List


def _truncate(value: str, limit: int = 50) -> str:
    return value[:limit] + "..." if len(value) > limit else value


class StructuredLogger:
    """Structured logger for record store, query and export operations."""

    def __init__(self, name: str = "school_closures"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if os.getenv("DEBUG", "false").lower() == "true" else logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_record_operation(self, operation: str, record_id: str, school_name: str = None, status: str = "success"):
        """Log a record store operation."""
        details = {"record_id": record_id}
        if school_name is not None:
            details["school_name"] = _truncate(school_name)

        self.log_operation(f"record.{operation}", status, details)

    def log_validation_failure(self, kind: str, fields: List[str] = None):
        """Log a rejected submission."""
        details = {"kind": kind}
        if fields:
            details["fields"] = fields

        self.log_operation("validation", "rejected", details, level=logging.WARNING)

    def log_export(self, fmt: str, record_count: int, filename: str = None, status: str = "success"):
        """Log an export request."""
        details = {"format": fmt, "record_count": record_count}
        if filename:
            details["filename"] = filename

        level = logging.INFO if status == "success" else logging.WARNING
        self.log_operation(f"export.{fmt}", status, details, level=level)

    def log_storage_event(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a storage read/write. Failures are logged at ERROR."""
        level = logging.ERROR if status == "failed" else logging.DEBUG
        if status == "recovered":
            level = logging.WARNING
        self.log_operation(f"storage.{operation}", status, details, level=level)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)


# Global logger instance
logger = StructuredLogger()
