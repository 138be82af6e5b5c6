"""
repositories/store_repo.py
--------------------------
Data access layer for stores.
Stores are looked up by name and created on first sight.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.store import Store
from utils.logger import get_logger

logger = get_logger(__name__)


class StoreRepository:
    """Repository for CRUD operations on the stores table."""

    def add(self, name: str) -> Store:
        """
        Insert a new store.

        Args:
            name: Store name.

        Returns:
            The new Store with its generated `id`.
        """
        sql = "INSERT INTO stores (name) VALUES (%s) RETURNING id, name;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                row = cur.fetchone()
            conn.commit()
            logger.info(f"Added store '{name}' #{row[0]}")
            return self._row_to_store(row)
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add store '{name}': {e}")
            raise
        finally:
            release_connection(conn)

    def get_by_name(self, name: str) -> Optional[Store]:
        """Fetch a store by its exact name, or None."""
        sql = "SELECT id, name FROM stores WHERE name = %s LIMIT 1;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                row = cur.fetchone()
                return self._row_to_store(row) if row else None
        finally:
            release_connection(conn)

    def get_or_create(self, name: str) -> Store:
        """
        Return the store called `name`, inserting it first if it is new.

        Returns:
            The existing or newly created Store.
        """
        store = self.get_by_name(name)
        if store is None:
            self.add(name)
            store = self.get_by_name(name)
        return store

    def get_all(self) -> list[Store]:
        """Get all stores ordered by name."""
        sql = "SELECT id, name FROM stores ORDER BY name;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_store(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_store(row: tuple) -> Store:
        """Convert a database row tuple to a Store domain object."""
        return Store(id=str(row[0]), name=row[1])
