"""
repositories/purchase_repo.py
-----------------------------
Data access layer for purchases (receipt lines).
All SQL queries related to the `purchases` table live here.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.purchase import Purchase
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, receipt_id, product_id, amount, unit_price, total_price, datetime"


def _to_float(value) -> Optional[float]:
    """Map a nullable FLOAT8 column; NULL stays None."""
    return float(value) if value is not None else None


class PurchaseRepository:
    """Repository for CRUD operations on the purchases table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, purchase: Purchase) -> Purchase:
        """
        Insert a purchase line.

        Returns:
            The same Purchase with its generated `id` populated.
        """
        sql = """
            INSERT INTO purchases (receipt_id, product_id, amount, unit_price, total_price, datetime)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    purchase.receipt_id, purchase.product_id, purchase.amount,
                    purchase.unit_price, purchase.total_price, purchase.datetime,
                ))
                purchase.id = str(cur.fetchone()[0])
            conn.commit()
            return purchase
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add purchase for receipt {purchase.receipt_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, purchase_id: str) -> Optional[Purchase]:
        """Fetch a single purchase by id, or None."""
        sql = f"SELECT {_COLUMNS} FROM purchases WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (purchase_id,))
                row = cur.fetchone()
                return self._row_to_purchase(row) if row else None
        finally:
            release_connection(conn)

    def get_by_receipt_id(self, receipt_id: str) -> list[Purchase]:
        """Fetch all lines of a receipt."""
        sql = f"SELECT {_COLUMNS} FROM purchases WHERE receipt_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (receipt_id,))
                return [self._row_to_purchase(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_product_id(self, product_id: str) -> list[Purchase]:
        """Fetch every purchase of a product, oldest first (price history)."""
        sql = f"SELECT {_COLUMNS} FROM purchases WHERE product_id = %s ORDER BY datetime;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (product_id,))
                return [self._row_to_purchase(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete_by_receipt_id(self, receipt_id: str) -> int:
        """
        Delete all lines of a receipt.

        Returns:
            Number of rows deleted.
        """
        sql = "DELETE FROM purchases WHERE receipt_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (receipt_id,))
                deleted = cur.rowcount
            conn.commit()
            if deleted:
                logger.info(f"Deleted {deleted} purchases of receipt {receipt_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete purchases of receipt {receipt_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_purchase(row: tuple) -> Purchase:
        """Convert a database row tuple to a Purchase domain object."""
        return Purchase(
            id=str(row[0]),
            receipt_id=row[1],
            product_id=str(row[2]) if row[2] is not None else None,
            amount=_to_float(row[3]),
            unit_price=_to_float(row[4]),
            total_price=_to_float(row[5]),
            datetime=row[6],
        )
