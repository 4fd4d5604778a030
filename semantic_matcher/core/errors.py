"""
Error taxonomy for Semantic Matcher.
"""

from typing import Optional


class SemanticMatcherError(Exception):
    """Base class for all application errors."""


class StoreConnectionError(SemanticMatcherError):
    """ChromaDB unreachable after the retry budget was exhausted."""

    def __init__(self, message: str, attempts: int = 0, last_error: Optional[str] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class ValidationError(SemanticMatcherError):
    """Malformed search request."""


class LoadError(SemanticMatcherError):
    """Data source could not be read or failed validation."""


class SearchError(SemanticMatcherError):
    """The vector store failed while answering a query."""


class NotInitializedError(SemanticMatcherError):
    """Operation attempted before the matcher reached the ready state."""
