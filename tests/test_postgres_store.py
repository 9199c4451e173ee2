"""Tests for the combined PostgreSQL store."""

import psycopg2
import pytest

from db.errors import ConnectivityError
from repositories.postgres_store import PostgresStore
from tests.conftest import Result


def test_ping_runs_trivial_query(conn) -> None:
    conn.queue(Result([(1,)]))

    PostgresStore().ping()

    assert conn.statements == ["SELECT 1;"]


def test_ping_failure_is_connectivity_error(conn) -> None:
    conn.fail_on("SELECT 1", psycopg2.OperationalError("could not connect to server"))

    with pytest.raises(ConnectivityError):
        PostgresStore().ping()


def test_ping_timeout_is_connectivity_error(conn) -> None:
    with pytest.raises(ConnectivityError):
        PostgresStore(timeout=0).ping()


def test_store_timeout_reaches_every_statement(conn) -> None:
    PostgresStore(timeout=1.5).list_recipes(None)

    assert conn.executed[0] == ("SET LOCAL statement_timeout = %s;", (1500,))
