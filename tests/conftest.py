import sqlite3

import pytest


@pytest.fixture(scope="function")
def sqlite_connection():
    """
    Yields a fresh SQLite connection for each test function.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture(scope="function")
def sqlite_run(sqlite_connection):
    """
    Executes a CompiledQuery and returns all resulting rows.
    """

    def _run(compiled):
        cursor = sqlite_connection.execute(compiled.sql, compiled.params)
        rows = cursor.fetchall()
        sqlite_connection.commit()
        return rows

    return _run
