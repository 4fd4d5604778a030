"""
Structured logging for Semantic Matcher.
Connection, collection and search operations are logged as
"Operation: ..., Status: ..., Details: {...}" lines.
"""

import logging
from typing import Any, Dict, Optional

# LOG_LEVEL values -> stdlib levels
LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class StructuredLogger:
    """Structured logger for matcher operations."""

    def __init__(self, name: str = "semantic_matcher"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def configure(self, level: str) -> None:
        """Apply a LOG_LEVEL value; unknown values mean info."""
        self.logger.setLevel(LEVELS.get((level or "").lower(), logging.INFO))

    @staticmethod
    def _format(message: str, details: Optional[Dict[str, Any]] = None) -> str:
        if details:
            return f"{message}, Details: {details}"
        return message

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        self.logger.log(level, self._format(message, details))

    def log_connection_attempt(self, url: str, attempt: int, remaining: int, error: str = None):
        """Log a failed liveness probe against the store."""
        details = {"url": url, "attempt": attempt, "retries_remaining": remaining}
        if error is not None:
            details["error"] = error[:200]
        self.log_operation("connection.heartbeat", "failed", details, level=logging.DEBUG)

    def log_collection_operation(self, operation: str, collection_name: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a collection lifecycle operation."""
        log_details = {"collection": collection_name}
        if details:
            log_details.update(details)

        level = logging.INFO if status == "success" else logging.DEBUG
        self.log_operation(f"collection.{operation}", status, log_details, level=level)

    def log_search(self, query: str, top_k: int, result_count: int, best_distance: Optional[float] = None):
        """Log a completed search."""
        details = {
            "query": query[:50] + "..." if len(query) > 50 else query,
            "top_k": top_k,
            "result_count": result_count,
        }
        if best_distance is not None:
            details["best_distance"] = best_distance

        self.log_operation("search", "success", details, level=logging.DEBUG)

    # Standard logging methods for compatibility
    def info(self, message: str, details: Dict[str, Any] = None) -> None:
        """Log an info message."""
        self.logger.info(self._format(message, details))

    def warning(self, message: str, details: Dict[str, Any] = None) -> None:
        """Log a warning message."""
        self.logger.warning(self._format(message, details))

    def error(self, message: str, details: Dict[str, Any] = None) -> None:
        """Log an error message."""
        self.logger.error(self._format(message, details))

    def debug(self, message: str, details: Dict[str, Any] = None) -> None:
        """Log a debug message."""
        self.logger.debug(self._format(message, details))


# Global logger instance
logger = StructuredLogger()
