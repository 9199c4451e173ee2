"""
db/errors.py
------------
Error taxonomy raised by the persistence layer.

Callers only ever see these classes. The underlying psycopg2 exception is
chained as ``__cause__`` so it can be logged, but its text never becomes
part of the message raised past the repository boundary.
"""

from typing import Optional


class StorageError(Exception):
    """Catch-all failure of a storage operation."""

    default_message = "storage operation failed"

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(f"{operation}: {message or self.default_message}")


class NotFoundError(StorageError):
    """The targeted row does not exist."""

    default_message = "not found"


class ConflictError(StorageError):
    """
    An update/delete matched an unexpected number of rows, or the engine
    rejected the write on an integrity constraint.
    """

    default_message = "conflicting or inconsistent write"


class ConnectivityError(StorageError):
    """The database could not be reached."""

    default_message = "database unavailable"


class QueryTimeoutError(StorageError, TimeoutError):
    """The per-call deadline expired before the operation completed."""

    default_message = "deadline exceeded"


class EmptyFilterError(StorageError, ValueError):
    """A search filter was submitted with no fields set."""

    default_message = "filter has no fields set"
