"""In-memory filtering of normalized catalog products."""
from __future__ import annotations

from typing import Iterable, List

from .models import INVALID_NUMBER, Numeric, Product, SearchFilter


def _known(value: Numeric) -> bool:
    return value is not None and value is not INVALID_NUMBER


def _in_stock(stock: Numeric) -> bool:
    return _known(stock) and stock > 0


def matches(product: Product, filters: SearchFilter) -> bool:
    """Return ``True`` when ``product`` satisfies every active constraint.

    Products with an unknown or unreadable price are never excluded by the
    price bounds.
    """
    if filters.category is not None and product.category != filters.category:
        return False
    price = product.price
    if filters.min_price is not None and _known(price) and price < filters.min_price:
        return False
    if filters.max_price is not None and _known(price) and price > filters.max_price:
        return False
    if filters.in_stock_only and not _in_stock(product.stock):
        return False
    return True


def search(products: Iterable[Product], filters: SearchFilter) -> List[Product]:
    return [product for product in products if matches(product, filters)]
