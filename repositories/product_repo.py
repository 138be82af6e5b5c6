"""
repositories/product_repo.py
----------------------------
Data access layer for products.
Products are looked up by name and created on first sight.
"""

from typing import Optional

from config import DEPOSIT_PRODUCT_NAMES
from db.connection import get_connection, release_connection
from models.product import Product
from utils.logger import get_logger

logger = get_logger(__name__)


class ProductRepository:
    """Repository for CRUD operations on the products table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, name: str, unit: Optional[str] = None) -> Product:
        """
        Insert a new product.

        Args:
            name: Product name.
            unit: Unit of measure.

        Returns:
            The new Product with its generated `id`.
        """
        sql = "INSERT INTO products (name, unit) VALUES (%s, %s) RETURNING id, name, unit;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name, unit))
                row = cur.fetchone()
            conn.commit()
            logger.info(f"Added product '{name}' #{row[0]}")
            return self._row_to_product(row)
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add product '{name}': {e}")
            raise
        finally:
            release_connection(conn)

    def get_or_create(self, name: str, unit: Optional[str] = None) -> Product:
        """
        Return the product called `name`, inserting it first if it is new.

        The unit is only used when the product is created; an existing
        product keeps the unit it was first stored with.
        """
        product = self.get_by_name(name)
        if product is None:
            self.add(name, unit)
            product = self.get_by_name(name)
        return product

    # ── READ ──────────────────────────────────────────────

    def get_by_name(self, name: str) -> Optional[Product]:
        """Fetch a product by its exact name, or None."""
        sql = "SELECT id, name, unit FROM products WHERE name = %s LIMIT 1;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name,))
                row = cur.fetchone()
                return self._row_to_product(row) if row else None
        finally:
            release_connection(conn)

    def get_all(self, include_deposits: bool = False) -> list[Product]:
        """
        Get all products ordered by name.

        Args:
            include_deposits: If False, bottle-deposit lines ('pant') are left out.
        """
        sql = "SELECT id, name, unit FROM products ORDER BY name;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                products = [self._row_to_product(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

        if include_deposits:
            return products
        return [p for p in products if not p.is_deposit(DEPOSIT_PRODUCT_NAMES)]

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_product(row: tuple) -> Product:
        """Convert a database row tuple to a Product domain object."""
        return Product(id=str(row[0]), name=row[1], unit=row[2])
