"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

# Creation order matters: each table only references tables above it
TABLES: dict[str, str] = {
    # Stores: one row per shop name
    "stores": """
        CREATE TABLE IF NOT EXISTS stores (
            id              TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
            name            TEXT
        );
    """,
    # Receipts: one row per imported visit, keyed by the receipt's own id
    "receipts": """
        CREATE TABLE IF NOT EXISTS receipts (
            id              TEXT PRIMARY KEY,
            imported        TIMESTAMP,
            date            TIMESTAMP,
            store_id        TEXT REFERENCES stores(id),
            source_pdf      TEXT,
            total           FLOAT8
        );
    """,
    # Products: one row per product name
    "products": """
        CREATE TABLE IF NOT EXISTS products (
            id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name            TEXT,
            unit            TEXT
        );
    """,
    # Purchases: one row per receipt line
    "purchases": """
        CREATE TABLE IF NOT EXISTS purchases (
            id              UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            receipt_id      TEXT REFERENCES receipts(id) ON DELETE CASCADE,
            product_id      UUID REFERENCES products(id),
            amount          FLOAT8,
            unit_price      FLOAT8,
            total_price     FLOAT8,
            datetime        TIMESTAMP
        );
    """,
}

# Name lookups and purchase history
INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_stores_name ON stores(name);",
    "CREATE INDEX IF NOT EXISTS idx_products_name ON products(name);",
    "CREATE INDEX IF NOT EXISTS idx_purchases_receipt ON purchases(receipt_id);",
    "CREATE INDEX IF NOT EXISTS idx_purchases_product ON purchases(product_id, datetime);",
]


def create_tables() -> list[str]:
    """
    Create any missing table and index in one transaction.
    Safe to call multiple times; tables left by an earlier importer are kept as they are.

    Returns:
        Names of the tables that did not exist before this call.
    """
    created: list[str] = []
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            for name, ddl in TABLES.items():
                cur.execute("SELECT to_regclass(%s);", (name,))
                if cur.fetchone()[0] is None:
                    created.append(name)
                cur.execute(ddl)
            for ddl in INDEXES:
                cur.execute(ddl)
        conn.commit()
    except Exception as e:
        conn.rollback()
        logger.error(f"Schema bootstrap failed, rolled back: {e}")
        raise
    finally:
        release_connection(conn)

    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    else:
        logger.info("All tables already present.")
    return created


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    new_tables = create_tables()
    close_pool()
    print(f"Schema ready ({len(new_tables)} new table(s)).")
