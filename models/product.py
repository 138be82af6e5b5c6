"""
models/product.py
-----------------
Domain model for products that appear on receipts.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Product:
    """
    A product, identified in imports by its name.

    Attributes:
        id: Database primary key (UUID generated by Postgres).
        name: Product name as printed on the receipt.
        unit: Unit the amount is measured in (e.g. 'st', 'kg').
    """
    id: str
    name: str
    unit: Optional[str] = None

    def is_deposit(self, deposit_names: list[str]) -> bool:
        """Returns True if this is a bottle-deposit line (e.g. 'Pant 1kr')."""
        lowered = self.name.lower()
        return any(lowered == d or lowered.startswith(d + " ") for d in deposit_names)

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})" if self.unit else self.name
