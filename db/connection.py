"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.
The pool is opened lazily on first use, and the schema is bootstrapped
right after it opens.
"""

import logging

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_LOG_QUERIES, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)
_sql_logger = get_logger("db.sql")

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    kwargs = {}
    if DB_LOG_QUERIES:
        # LoggingConnection writes statements at DEBUG
        _sql_logger.setLevel(logging.DEBUG)
        kwargs["connection_factory"] = extras.LoggingConnection
    try:
        logger.info("Connecting to Postgres...")
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL, **kwargs)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def is_initialized() -> bool:
    """Return True if the pool is open."""
    return _pool is not None


def get_connection():
    """
    Get a connection from the pool, opening the pool first if needed.

    Opening the pool also creates any missing tables.

    Returns:
        A psycopg2 connection object.
    """
    if _pool is None:
        init_pool()
        from db.init_db import create_tables
        create_tables()
    conn = _pool.getconn()
    if isinstance(conn, extras.LoggingConnection):
        conn.initialize(_sql_logger)
    return conn


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
