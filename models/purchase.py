"""
models/purchase.py
------------------
Domain model for a single receipt line.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Purchase:
    """
    One product line on a receipt.

    Attributes:
        receipt_id: Foreign key to receipts.id.
        product_id: Foreign key to products.id.
        amount: Quantity bought, in the product's unit.
        unit_price: Price per unit.
        total_price: Price paid for the line.
        datetime: Time of the visit (copied from the receipt).
        id: Database primary key (None for new records).

    Value columns are nullable, so rows from older imports may carry None.
    """
    receipt_id: str
    product_id: str
    amount: Optional[float]
    unit_price: Optional[float]
    total_price: Optional[float]
    datetime: Optional[datetime]
    id: Optional[str] = None

    def __str__(self) -> str:
        amount = f"{self.amount:g}" if self.amount is not None else "?"
        unit_price = f"{self.unit_price:.2f}" if self.unit_price is not None else "?"
        total_price = f"{self.total_price:.2f}" if self.total_price is not None else "?"
        return f"{amount} x {unit_price} = {total_price}"
