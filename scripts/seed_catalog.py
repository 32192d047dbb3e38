#!/usr/bin/env python3
"""
Insert sample products directly into the configured database.

Usage:
  python scripts/seed_catalog.py [--count 5] [--prefix "Sample"] [--price 9.90] [--stock 10]
"""
from __future__ import annotations

import argparse
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

# Make the shopapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shopapi.db.create_tables import create_all  # noqa: E402
from shopapi.domain.models import Product  # noqa: E402
from shopapi.repositories.sql_repository import ProductRepository  # noqa: E402


def build_products(count: int, prefix: str, price: Decimal, stock: int) -> list[Product]:
    return [
        Product(
            name=f"{prefix} {n}",
            description=f"{prefix} product number {n}",
            price=price,
            stock=stock,
        )
        for n in range(1, count + 1)
    ]


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the products table")
    ap.add_argument("--count", type=int, default=5, help="Number of products (default: 5)")
    ap.add_argument("--prefix", default="Sample", help="Name prefix (default: Sample)")
    ap.add_argument("--price", default="9.90", help="Unit price (default: 9.90)")
    ap.add_argument("--stock", type=int, default=10, help="Stock per product (default: 10)")
    args = ap.parse_args()

    if args.count < 1:
        raise SystemExit("--count must be at least 1")
    try:
        price = Decimal(args.price)
    except InvalidOperation:
        raise SystemExit(f"Invalid price: {args.price}")

    create_all()
    repo = ProductRepository()
    for product in build_products(args.count, args.prefix.strip() or "Sample", price, args.stock):
        saved = repo.save(product)
        print(f"  #{saved.id}: {saved.name} ({saved.price}, stock {saved.stock})")
    print(f"OK: {args.count} products inserted, {repo.count()} total")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
