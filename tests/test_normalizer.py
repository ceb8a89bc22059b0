"""Tests for catalog record normalization."""

import math

from product_search.models import INVALID_NUMBER
from product_search.normalizer import coerce_number, is_truthy, normalize, normalize_catalog


def test_normalize_keeps_clean_record():
    """A well-formed record passes through unchanged."""

    product = normalize({"id": 1, "name": "A", "category": "X", "price": 10, "stock": 2})

    assert product.model_dump() == {"id": 1, "name": "A", "category": "X", "price": 10, "stock": 2}


def test_normalize_fills_defaults_for_missing_fields():
    product = normalize({"id": "sku-9"})

    assert product.id == "sku-9"
    assert product.name == "Unnamed"
    assert product.category is None
    assert product.price is None
    assert product.stock is None


def test_normalize_treats_falsy_text_as_missing():
    """Empty strings, zero and false fall back just like a missing value."""

    assert normalize({"id": 1, "name": "", "category": ""}).name == "Unnamed"
    assert normalize({"id": 1, "name": 0}).name == "Unnamed"
    assert normalize({"id": 1, "name": False, "category": 0}).category is None


def test_normalize_coerces_numeric_strings():
    product = normalize({"id": 2, "price": "89.50", "stock": " 12 "})

    assert product.price == 89.5
    assert product.stock == 12
    assert isinstance(product.stock, int)


def test_normalize_marks_unreadable_numbers():
    """A malformed stored price is flagged rather than raising or becoming null."""

    product = normalize({"id": 5, "price": "abc", "stock": "lots"})

    assert product.price is INVALID_NUMBER
    assert product.stock is INVALID_NUMBER
    assert product.model_dump(mode="json")["price"] is None


def test_coerce_number_variants():
    assert coerce_number(None) is None
    assert coerce_number("") == 0
    assert coerce_number("   ") == 0
    assert coerce_number(True) == 1
    assert coerce_number(False) == 0
    assert coerce_number("1e3") == 1000.0
    assert coerce_number(".5") == 0.5
    assert coerce_number("-7") == -7
    assert coerce_number("0x1F") == 31
    assert coerce_number("0b101") == 5
    assert coerce_number("12abc") is INVALID_NUMBER
    assert coerce_number(float("nan")) is INVALID_NUMBER
    assert coerce_number(math.inf) is INVALID_NUMBER
    assert coerce_number("1e999") is INVALID_NUMBER
    assert coerce_number([1]) is INVALID_NUMBER


def test_is_truthy_counts_empty_containers_as_truthy():
    assert is_truthy([]) is True
    assert is_truthy({}) is True
    assert is_truthy(0.0) is False
    assert is_truthy(float("nan")) is False
    assert is_truthy("0") is True


def test_normalize_catalog_preserves_order():
    products = normalize_catalog([{"id": 3}, {"id": 1}, {"id": 2}])

    assert [product.id for product in products] == [3, 1, 2]


def test_coerce_number_only_accepts_ascii_digits():
    """Digits from other scripts are not numbers in stored data."""

    assert coerce_number("١٢") is INVALID_NUMBER
    assert coerce_number("0x١") is INVALID_NUMBER
