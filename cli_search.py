"""Terminal client that reuses the in-process search pipeline."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, Sequence

from product_search.catalog import CatalogError, FileCatalog
from product_search.config import settings
from product_search.models import FieldError, Product
from product_search.normalizer import normalize_catalog
from product_search.search import search
from product_search.validation import INVALID_JSON, InvalidJSONBody, parse_body, validate

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def build_request(args: argparse.Namespace) -> dict:
    if args.json is not None:
        return parse_body(args.json)
    request: dict = {}
    if args.category is not None:
        request["category"] = args.category
    if args.min_price is not None:
        request["minPrice"] = args.min_price
    if args.max_price is not None:
        request["maxPrice"] = args.max_price
    if args.in_stock_only:
        request["inStockOnly"] = True
    return request


def print_errors(errors: Sequence[FieldError]) -> None:
    print(f"{RED}Invalid request{RESET}")
    for error in errors:
        print(f"  {error.field}: {error.message}")


def print_products(items: Sequence[Product]) -> None:
    print(f"results: {len(items)}")
    for idx, item in enumerate(items, start=1):
        row = item.model_dump(mode="json")
        in_stock = isinstance(row["stock"], (int, float)) and row["stock"] > 0
        color = GREEN if in_stock else RED
        print(
            f"  {idx:02d}. {row['id']} | {row['name']} | {row['category'] or '-'} | "
            f"price={row['price']} | {color}stock={row['stock']}{RESET}"
        )


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Search the product catalog from the terminal")
    parser.add_argument("--category", help="Exact category to match")
    parser.add_argument("--min-price", type=float, help="Lowest price to include")
    parser.add_argument("--max-price", type=float, help="Highest price to include")
    parser.add_argument("--in-stock-only", action="store_true", help="Only items with positive stock")
    parser.add_argument("--json", help="Raw request body; overrides the filter flags")
    parser.add_argument("--catalog", type=Path, default=Path(settings.catalog_path), help="Catalog JSON file")
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        request = build_request(args)
    except InvalidJSONBody:
        print_errors([FieldError(field="body", message=INVALID_JSON)])
        return 2

    filters, errors = validate(request)
    if errors:
        print_errors(errors)
        return 2

    try:
        records = FileCatalog(args.catalog).load()
    except CatalogError as exc:
        print(f"{RED}{exc}{RESET}")
        return 1
    print_products(search(normalize_catalog(records), filters))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
