"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "groceries")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# Log every SQL statement with its parameters
DB_LOG_QUERIES: bool = os.getenv("DB_LOG_QUERIES", "false").lower() in ("1", "true", "yes")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Products ──────────────────────────────────────────────
# Bottle-deposit lines, hidden from product listings
_raw_deposits = os.getenv("DEPOSIT_PRODUCT_NAMES", "pant")
DEPOSIT_PRODUCT_NAMES: list[str] = [
    name.strip().lower() for name in _raw_deposits.split(",") if name.strip()
]
