"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and the per-call transaction scope.
Uses psycopg2's ThreadedConnectionPool so concurrent request handlers can
share one pool without extra locking on our side.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import extensions, extras, pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN, DB_QUERY_TIMEOUT_SECONDS
from db.errors import (
    ConflictError,
    ConnectivityError,
    NotFoundError,
    QueryTimeoutError,
    StorageError,
)
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None

# UUID columns come back as uuid.UUID instead of str
extras.register_uuid()


def init_pool(
    min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL
) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string.

    Raises:
        ConnectivityError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise ConnectivityError("init pool") from e


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        ConnectivityError: If the pool has not been initialized or cannot hand out a connection.
    """
    if _pool is None:
        logger.error("Database pool not initialized. Call init_pool() first.")
        raise ConnectivityError("get connection", "pool not initialized")
    try:
        return _pool.getconn()
    except (pool.PoolError, psycopg2.OperationalError) as e:
        logger.error(f"Failed to acquire a database connection: {e}")
        raise ConnectivityError("get connection") from e


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.
    Broken connections are discarded instead of being reused.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn, close=bool(conn.closed))


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


class Transaction:
    """
    A cursor bound to one transaction and one deadline.

    Statements are only started while the deadline has not passed; the
    server-side ``statement_timeout`` bounds each statement in flight.
    """

    def __init__(self, cursor, operation: str, deadline: float):
        self.cursor = cursor
        self.operation = operation
        self.deadline = deadline

    def check_deadline(self) -> None:
        if time.monotonic() >= self.deadline:
            raise QueryTimeoutError(self.operation)

    def execute(self, query: str, params=None):
        """Run one statement and return the underlying cursor."""
        self.check_deadline()
        self.cursor.execute(query, params)
        return self.cursor

    def fetchone(self):
        return self.cursor.fetchone()

    def fetchall(self) -> list:
        return self.cursor.fetchall()

    @property
    def rowcount(self) -> int:
        return self.cursor.rowcount

    def expect_rowcount(self, expected: int = 1, missing_is_not_found: bool = True) -> None:
        """
        Verify the last statement touched exactly ``expected`` rows.

        Args:
            expected: Row count the statement must report.
            missing_is_not_found: Report zero rows on a single-row write as
                NotFoundError. Turn off for rows counted under a lock.

        Raises:
            NotFoundError: Nothing matched a single-row write.
            ConflictError: Any other mismatch.
        """
        actual = self.cursor.rowcount
        if actual == expected:
            return
        if missing_is_not_found and actual == 0 and expected == 1:
            raise NotFoundError(self.operation)
        raise ConflictError(
            self.operation, f"expected {expected} affected rows, got {actual}"
        )


def _rollback(conn, operation: str) -> None:
    try:
        conn.rollback()
    except psycopg2.Error as e:
        # the connection is already gone; release_connection() drops it
        logger.warning(f"Rollback failed for {operation}: {e}")


@contextmanager
def transaction(operation: str, timeout: Optional[float] = None) -> Iterator[Transaction]:
    """
    Run a block of statements as one transaction under a deadline.

    Commits when the block exits normally, rolls back on any exception
    (cancellation included) and always returns the connection to the pool.
    psycopg2 errors are translated into the ``db.errors`` taxonomy.

    Args:
        operation: Name used in logs and error messages.
        timeout: Deadline in seconds (default: DB_QUERY_TIMEOUT_SECONDS).
    """
    if timeout is None:
        timeout = DB_QUERY_TIMEOUT_SECONDS
    deadline = time.monotonic() + timeout
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            tx = Transaction(cur, operation, deadline)
            tx.execute("SET LOCAL statement_timeout = %s;", (int(timeout * 1000),))
            yield tx
            tx.check_deadline()
        conn.commit()
    except NotFoundError:
        _rollback(conn, operation)
        raise
    except StorageError as e:
        _rollback(conn, operation)
        logger.error(f"Failed to {operation}: {e}")
        raise
    except extensions.QueryCanceledError as e:
        _rollback(conn, operation)
        logger.error(f"Failed to {operation}: statement timed out: {e}")
        raise QueryTimeoutError(operation) from e
    except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
        _rollback(conn, operation)
        logger.error(f"Failed to {operation}: connection error: {e}")
        raise ConnectivityError(operation) from e
    except psycopg2.IntegrityError as e:
        _rollback(conn, operation)
        logger.error(f"Failed to {operation}: integrity violation: {e}")
        raise ConflictError(operation) from e
    except psycopg2.Error as e:
        _rollback(conn, operation)
        logger.error(f"Failed to {operation}: {e}")
        raise StorageError(operation) from e
    except BaseException:
        _rollback(conn, operation)
        raise
    finally:
        release_connection(conn)
