"""
repositories/receipt_repo.py
----------------------------
Data access layer for receipts.
All SQL queries related to the `receipts` table live here.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.receipt import Receipt
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, imported, date, store_id, source_pdf, total"


def _to_float(value) -> Optional[float]:
    """Map a nullable FLOAT8 column; NULL stays None."""
    return float(value) if value is not None else None


class ReceiptRepository:
    """Repository for CRUD operations on the receipts table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, receipt: Receipt) -> Receipt:
        """
        Insert a receipt. The id is supplied by the caller.

        Raises:
            psycopg2.IntegrityError: If a receipt with the same id exists.
        """
        sql = f"""
            INSERT INTO receipts ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s);
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    receipt.id, receipt.imported, receipt.date,
                    receipt.store_id, receipt.source_pdf, receipt.total,
                ))
            conn.commit()
            logger.info(f"Added receipt {receipt.id} (total {receipt.total})")
            return receipt
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add receipt {receipt.id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, receipt_id: str) -> Optional[Receipt]:
        """Fetch a receipt by id, or None."""
        sql = f"SELECT {_COLUMNS} FROM receipts WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (receipt_id,))
                row = cur.fetchone()
                return self._row_to_receipt(row) if row else None
        finally:
            release_connection(conn)

    def get_by_store(self, store_id: str) -> list[Receipt]:
        """Fetch all receipts from a store, newest first."""
        sql = f"SELECT {_COLUMNS} FROM receipts WHERE store_id = %s ORDER BY date DESC;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (store_id,))
                return [self._row_to_receipt(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, receipt_id: str) -> bool:
        """
        Delete a receipt by id. Its purchases go with it (ON DELETE CASCADE).

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM receipts WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (receipt_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted receipt {receipt_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete receipt {receipt_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_receipt(row: tuple) -> Receipt:
        """Convert a database row tuple to a Receipt domain object."""
        return Receipt(
            id=row[0],
            imported=row[1],
            date=row[2],
            store_id=row[3],
            source_pdf=row[4],
            total=_to_float(row[5]),
        )
