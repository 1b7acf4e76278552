"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError, so callers can
catch every storage failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialized or is not initialized yet."""

    pass
