"""
models/store.py
---------------
Domain model for shops that receipts come from.
"""

from dataclasses import dataclass


@dataclass
class Store:
    """
    A shop, identified in imports by its name.

    Attributes:
        id: Database primary key (generated by Postgres).
        name: Store name as printed on the receipt.
    """
    id: str
    name: str

    def __str__(self) -> str:
        return self.name
