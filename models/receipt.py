"""
models/receipt.py
-----------------
Domain model for an imported receipt.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Receipt:
    """
    One receipt, i.e. one visit to a store.

    Attributes:
        id: Receipt identifier supplied by the importer.
        imported: When the receipt was written to the database (UTC).
        date: When the visit happened (UTC).
        store_id: Foreign key to stores.id.
        source_pdf: File the receipt was parsed from, if any.
        total: Receipt total.

    Rows written by older importers may hold NULL in any column but id.
    """
    id: str
    imported: Optional[datetime]
    date: Optional[datetime]
    store_id: Optional[str]
    total: Optional[float]
    source_pdf: Optional[str] = None

    def __str__(self) -> str:
        when = f"{self.date:%Y-%m-%d %H:%M}" if self.date else "?"
        total = f"{self.total:.2f}" if self.total is not None else "?"
        return f"{self.id} | {when} | {total}"
