"""Custom exceptions for todo list operations.

Persistence and configuration failures get their own types so callers can
recover from them without catching unrelated errors.
"""


class TodoError(Exception):
    """Base exception for all todo application errors."""


class StorageError(TodoError):
    """Raised when the todo file cannot be read or written."""


class ConfigError(TodoError):
    """Raised when configuration is invalid or cannot be loaded."""
