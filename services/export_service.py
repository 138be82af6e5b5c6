"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of a product's price history.
"""

import io

import pandas as pd

from repositories.product_repo import ProductRepository
from repositories.purchase_repo import PurchaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_HEADERS = ["date", "receipt", "amount", "unit", "unit_price", "total_price"]


class ProductNotFoundError(LookupError):
    """Raised when exporting a product name that was never imported."""


class ExportService:
    """Generates downloadable price-history reports in CSV and Excel formats."""

    def __init__(self):
        self.products = ProductRepository()
        self.purchases = PurchaseRepository()

    def _history_frame(self, product_name: str) -> pd.DataFrame:
        """Build one row per purchase of the product, oldest first."""
        product = self.products.get_by_name(product_name)
        if product is None:
            raise ProductNotFoundError(f"Unknown product: {product_name}")

        data = [
            {
                "date": p.datetime.isoformat() if p.datetime else None,
                "receipt": p.receipt_id,
                "amount": p.amount,
                "unit": product.unit or "",
                "unit_price": p.unit_price,
                "total_price": p.total_price,
            }
            for p in self.purchases.get_by_product_id(product.id)
        ]
        return pd.DataFrame(data, columns=_HEADERS)

    def export_product_history_csv(self, product_name: str) -> io.BytesIO:
        """
        Export every purchase of a product as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._history_frame(product_name)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} purchases of '{product_name}' as CSV")
        return buffer

    def export_product_history_excel(self, product_name: str) -> io.BytesIO:
        """
        Export every purchase of a product as an Excel (.xlsx) file,
        with a second sheet summarising the unit price per year.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self._history_frame(product_name)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Purchases", index=False)

            if not df.empty:
                years = pd.to_datetime(df["date"]).dt.year
                summary = (
                    df.groupby(years)["unit_price"]
                    .agg(["min", "mean", "max", "count"])
                    .reset_index()
                )
                summary.columns = ["year", "min_price", "avg_price", "max_price", "purchases"]
                summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} purchases of '{product_name}' as Excel")
        return buffer
