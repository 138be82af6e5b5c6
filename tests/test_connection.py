"""
Tests for db.connection and db.init_db.
"""
import logging
from unittest.mock import MagicMock

import psycopg2
import pytest
from psycopg2 import extras

from db import connection, init_db


@pytest.fixture
def fake_pool(monkeypatch):
    """Replace SimpleConnectionPool and start every test with no pool open."""
    monkeypatch.setattr(connection, "_pool", None)
    monkeypatch.setattr(connection, "DB_LOG_QUERIES", False)
    pool_cls = MagicMock()
    monkeypatch.setattr(connection.pool, "SimpleConnectionPool", pool_cls)
    return pool_cls


@pytest.fixture
def sql_logger_level():
    """Restore the db.sql and root logger levels after a test changes them."""
    sql_logger = connection._sql_logger
    root = logging.getLogger()
    saved = (sql_logger.level, root.level)
    sql_logger.setLevel(logging.NOTSET)
    yield sql_logger
    sql_logger.setLevel(saved[0])
    root.setLevel(saved[1])


class TestConnectionPool:
    """Tests for the connection pool helpers."""

    def test_init_pool_is_idempotent(self, fake_pool):
        connection.init_pool(1, 3)
        connection.init_pool(1, 3)

        fake_pool.assert_called_once_with(1, 3, connection.DATABASE_URL)
        assert connection.is_initialized()

    def test_init_pool_with_query_logging(self, fake_pool, monkeypatch, sql_logger_level):
        """Should use LoggingConnection when query logging is on."""
        monkeypatch.setattr(connection, "DB_LOG_QUERIES", True)

        connection.init_pool(1, 2)

        assert fake_pool.call_args.kwargs == {"connection_factory": extras.LoggingConnection}

    def test_query_logging_enables_debug_on_sql_logger(self, fake_pool, monkeypatch, sql_logger_level):
        """Should let the DEBUG statements of LoggingConnection through at the default INFO level."""
        monkeypatch.setattr(connection, "DB_LOG_QUERIES", True)
        logging.getLogger().setLevel(logging.INFO)

        connection.init_pool()

        assert connection._sql_logger.isEnabledFor(logging.DEBUG)

    def test_sql_logger_untouched_without_query_logging(self, fake_pool, sql_logger_level):
        connection.init_pool()
        assert connection._sql_logger.level == logging.NOTSET

    def test_init_pool_failure_propagates(self, fake_pool):
        fake_pool.side_effect = psycopg2.OperationalError("refused")

        with pytest.raises(psycopg2.OperationalError):
            connection.init_pool()
        assert not connection.is_initialized()

    def test_get_connection_opens_pool_and_creates_schema(self, fake_pool, monkeypatch):
        """Should lazily connect and bootstrap the tables on first use."""
        create_tables = MagicMock()
        monkeypatch.setattr(init_db, "create_tables", create_tables)

        conn = connection.get_connection()

        fake_pool.assert_called_once()
        create_tables.assert_called_once()
        assert conn is fake_pool.return_value.getconn.return_value

    def test_get_connection_initializes_logging_connection(self, fake_pool, monkeypatch):
        monkeypatch.setattr(init_db, "create_tables", MagicMock())
        logging_conn = MagicMock(spec=extras.LoggingConnection)
        fake_pool.return_value.getconn.return_value = logging_conn

        assert connection.get_connection() is logging_conn
        logging_conn.initialize.assert_called_once()

    def test_release_and_close(self, fake_pool):
        connection.init_pool()
        conn = MagicMock()

        connection.release_connection(conn)
        connection.close_pool()

        fake_pool.return_value.putconn.assert_called_once_with(conn)
        fake_pool.return_value.closeall.assert_called_once()
        assert not connection.is_initialized()


class TestCreateTables:
    """Tests for db.init_db.create_tables."""

    def test_tables_created_in_dependency_order(self):
        """Each table should come after the tables it references."""
        assert list(init_db.TABLES) == ["stores", "receipts", "products", "purchases"]
        for name, ddl in init_db.TABLES.items():
            assert f"CREATE TABLE IF NOT EXISTS {name}" in ddl

    def test_reports_new_tables_and_commits(self, patch_db):
        """Should return only the tables that were missing."""
        conn, cursor = patch_db("db.init_db")
        # to_regclass: stores and receipts exist, products and purchases don't
        cursor.fetchone.side_effect = [("stores",), ("receipts",), (None,), (None,)]

        created = init_db.create_tables()

        assert created == ["products", "purchases"]
        executed = [c.args[0] for c in cursor.execute.call_args_list]
        for ddl in list(init_db.TABLES.values()) + init_db.INDEXES:
            assert ddl in executed
        conn.commit.assert_called_once()

    def test_existing_schema_creates_nothing(self, patch_db):
        _, cursor = patch_db("db.init_db")
        cursor.fetchone.return_value = ("x",)
        assert init_db.create_tables() == []

    def test_create_tables_rolls_back_on_error(self, patch_db):
        conn, cursor = patch_db("db.init_db")
        cursor.execute.side_effect = psycopg2.ProgrammingError("permission denied")

        with pytest.raises(psycopg2.ProgrammingError):
            init_db.create_tables()
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
