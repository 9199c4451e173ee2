"""
main.py
-------
Entry point for the wdiet persistence service.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Check the database answers.
    - Hand out the `Store` used by the request handlers.
"""

from config import DB_QUERY_TIMEOUT_SECONDS
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from repositories.postgres_store import PostgresStore
from utils.logger import get_logger

logger = get_logger(__name__)


def create_store(timeout: float = DB_QUERY_TIMEOUT_SECONDS) -> PostgresStore:
    """
    Initialize the pool and return a ready PostgresStore.

    Raises:
        ConnectivityError: The database cannot be reached.
    """
    init_pool()
    store = PostgresStore(timeout=timeout)
    store.ping()
    return store


def main() -> None:
    """Create the schema and verify connectivity."""
    logger.info("Starting wdiet storage...")
    try:
        create_store()
        create_tables()
        logger.info("Storage is ready.")
    finally:
        close_pool()


if __name__ == "__main__":
    main()
