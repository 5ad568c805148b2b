"""Application-level exceptions.

These are business-logic errors, not HTTP errors. The presentation layer
(e.g. FastAPI routes) translates them into appropriate HTTP responses.
"""


class ValidationError(ValueError):
    """Raised when a required input is empty or missing."""


class ConflictError(ValueError):
    """Raised when a unique key already exists."""


class ProviderError(RuntimeError):
    """Raised when an external provider (LLM, places lookup) fails."""


class StorageError(RuntimeError):
    """Raised when the persistence layer fails."""
