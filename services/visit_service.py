"""
services/visit_service.py
-------------------------
Imports receipt visits into the database.
Orchestrates the store, receipt, product and purchase repositories.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from models.purchase import Purchase
from models.receipt import Receipt
from models.visit import Visit
from repositories.product_repo import ProductRepository
from repositories.purchase_repo import PurchaseRepository
from repositories.receipt_repo import ReceiptRepository
from repositories.store_repo import StoreRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class VisitService:
    """
    Writes a Visit as one receipt plus one purchase per product line.

    Workflow:
        1. Look up the store by name, creating it if missing.
        2. Drop any receipt already stored under the visit's id, with its lines.
        3. Insert the receipt.
        4. For each product line, look up or create the product and insert a purchase.
    """

    def __init__(self):
        self.stores = StoreRepository()
        self.receipts = ReceiptRepository()
        self.products = ProductRepository()
        self.purchases = PurchaseRepository()

    def import_visit(self, visit: Visit) -> Receipt:
        """
        Persist one visit. Re-importing the same id replaces the earlier import.

        Returns:
            The stored Receipt.
        """
        logger.info(f"Importing visit {visit.id} from '{visit.store}' ({len(visit.products)} lines)")

        store = self.stores.get_or_create(visit.store)

        if self.receipts.get_by_id(visit.id) is not None:
            logger.info(f"Receipt {visit.id} already imported, replacing it")
            self.purchases.delete_by_receipt_id(visit.id)
            self.receipts.delete(visit.id)

        receipt = self.receipts.add(Receipt(
            id=visit.id,
            imported=datetime.now(timezone.utc).replace(tzinfo=None),
            date=visit.datetime,
            store_id=store.id,
            source_pdf=visit.source_pdf,
            total=visit.total,
        ))

        for line in visit.products:
            product = self.products.get_or_create(line.name, line.unit)
            self.purchases.add(Purchase(
                receipt_id=visit.id,
                product_id=product.id,
                amount=line.amount,
                unit_price=line.unit_price,
                total_price=line.total_price,
                datetime=visit.datetime,
            ))

        return receipt

    def import_file(self, path: Union[str, Path]) -> list[Receipt]:
        """
        Import every visit in a JSON file (a single object or an array of them).

        Raises:
            ValueError: If the file isn't a visit object or a list of them.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a visit object or a list of visits")

        visits = [Visit.from_dict(item) for item in data]
        receipts = [self.import_visit(v) for v in visits]
        logger.info(f"Imported {len(receipts)} visit(s) from {path}")
        return receipts

    def get_receipt_details(self, receipt_id: str) -> Optional[dict]:
        """
        Fetch a receipt together with its lines.

        Returns:
            Dict with 'receipt' and 'purchases' keys, or None if not found.
        """
        receipt = self.receipts.get_by_id(receipt_id)
        if receipt is None:
            return None
        return {
            "receipt": receipt,
            "purchases": self.purchases.get_by_receipt_id(receipt_id),
        }
