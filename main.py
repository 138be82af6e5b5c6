"""
main.py
-------
Command line entry point for the receipt store.

Commands:
    init-db                 Create the tables if they don't exist.
    import FILE...          Import visits from JSON files.
    products [--all]        List known products (deposit lines hidden unless --all).
    receipt ID              Show a receipt and its lines.
    history PRODUCT -o FILE Export a product's price history (CSV, or Excel with --excel).
"""

import argparse
import sys

from db.connection import close_pool, init_pool
from db.init_db import create_tables
from repositories.product_repo import ProductRepository
from services.export_service import ExportService, ProductNotFoundError
from services.visit_service import VisitService
from utils.logger import get_logger

logger = get_logger(__name__)


def cmd_init_db(args: argparse.Namespace) -> int:
    # Tables were already created by main() on startup
    print("Database schema is up to date.")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    service = VisitService()
    count = 0
    for path in args.files:
        count += len(service.import_file(path))
    print(f"Imported {count} visit(s).")
    return 0


def cmd_products(args: argparse.Namespace) -> int:
    for product in ProductRepository().get_all(include_deposits=args.all):
        print(product)
    return 0


def cmd_receipt(args: argparse.Namespace) -> int:
    details = VisitService().get_receipt_details(args.id)
    if details is None:
        print(f"Receipt {args.id} not found.", file=sys.stderr)
        return 1
    print(details["receipt"])
    for purchase in details["purchases"]:
        print(f"  {purchase}")
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    service = ExportService()
    try:
        if args.excel:
            buffer = service.export_product_history_excel(args.product)
        else:
            buffer = service.export_product_history_csv(args.product)
    except ProductNotFoundError:
        print(f"Product {args.product!r} not found.", file=sys.stderr)
        return 1
    with open(args.output, "wb") as f:
        f.write(buffer.getvalue())
    print(f"Wrote {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(prog="receipts", description="Grocery receipt store")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create the database tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("import", help="Import visits from JSON files")
    p.add_argument("files", nargs="+", help="JSON file with a visit or a list of visits")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("products", help="List products")
    p.add_argument("--all", action="store_true", help="Include deposit lines")
    p.set_defaults(func=cmd_products)

    p = sub.add_parser("receipt", help="Show a receipt with its lines")
    p.add_argument("id", help="Receipt id")
    p.set_defaults(func=cmd_receipt)

    p = sub.add_parser("history", help="Export a product's price history")
    p.add_argument("product", help="Exact product name")
    p.add_argument("-o", "--output", required=True, help="Output file")
    p.add_argument("--excel", action="store_true", help="Write .xlsx instead of CSV")
    p.set_defaults(func=cmd_history)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, open the database and run the chosen command."""
    args = build_parser().parse_args(argv)

    # ── 1. Database setup ─────────────────────────────────
    init_pool()
    create_tables()

    # ── 2. Run the command ────────────────────────────────
    try:
        return args.func(args)
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
