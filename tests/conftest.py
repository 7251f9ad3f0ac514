from unittest.mock import MagicMock

import pytest


def _context(mock, value):
    # a context manager that yields `value` and lets exceptions through
    mock.__enter__.return_value = value
    mock.__exit__.return_value = False
    return mock


@pytest.fixture
def cursor():
    cur = MagicMock(name="cursor")
    cur.rowcount = 1
    return cur


@pytest.fixture
def connection(cursor):
    """Stand-in for a psycopg connection whose cursors are all `cursor`."""
    conn = MagicMock(name="connection")
    _context(conn, conn)
    _context(conn.cursor.return_value, cursor)
    _context(conn.transaction.return_value, None)
    return conn
