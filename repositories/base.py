"""
repositories/base.py
--------------------
Shared plumbing for the PostgreSQL repositories.
"""

from typing import Optional

from db.connection import transaction


class BaseRepository:
    """Holds the per-call deadline used by every statement of a repository."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def _transaction(self, operation: str):
        return transaction(operation, self.timeout)
