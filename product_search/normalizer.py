"""Normalization of loosely typed catalog records.

Stored records are written by hand and by assorted exporters, so the same
field can show up as a number, a numeric string, an empty string or not at
all. :func:`normalize` folds every variant into a :class:`Product`:

* ``name`` falls back to ``"Unnamed"`` and ``category`` to ``None`` when the
  stored value is falsy (``""``, ``0``, ``false``, ``null`` or missing);
* ``price``/``stock`` become ``None`` when missing or ``null`` and are
  otherwise coerced to numbers. Values that do not parse become
  :data:`INVALID_NUMBER` instead of raising.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from .models import INVALID_NUMBER, Numeric, Product

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Unnamed"

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_INT_RE = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))", re.ASCII)


def is_truthy(value: Any) -> bool:
    """Truthiness as the stored JSON sees it: empty containers are truthy."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _finite_or_invalid(value: float) -> Numeric:
    return value if math.isfinite(value) else INVALID_NUMBER


def _parse_numeric_text(text: str) -> Numeric:
    text = text.strip()
    if not text:
        return 0
    if _DECIMAL_RE.fullmatch(text):
        if any(ch in text for ch in ".eE"):
            return _finite_or_invalid(float(text))
        return int(text)
    prefixed = _PREFIXED_INT_RE.fullmatch(text)
    if prefixed:
        if prefixed.group("hex"):
            return int(prefixed.group("hex"), 16)
        if prefixed.group("oct"):
            return int(prefixed.group("oct"), 8)
        return int(prefixed.group("bin"), 2)
    return INVALID_NUMBER


def coerce_number(value: Any) -> Numeric:
    """Coerce a stored value to a number, ``None`` or :data:`INVALID_NUMBER`."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _finite_or_invalid(value)
    if isinstance(value, str):
        return _parse_numeric_text(value)
    return INVALID_NUMBER


def _text_or(value: Any, fallback: str | None) -> str | None:
    if not is_truthy(value):
        return fallback
    return value if isinstance(value, str) else str(value)


def normalize(raw: Mapping[str, Any]) -> Product:
    """Build a canonical :class:`Product` from one stored record."""
    price = coerce_number(raw.get("price"))
    stock = coerce_number(raw.get("stock"))
    if price is INVALID_NUMBER or stock is INVALID_NUMBER:
        logger.debug("Record id=%r has unreadable numbers price=%r stock=%r", raw.get("id"), raw.get("price"), raw.get("stock"))
    return Product(
        id=raw.get("id"),
        name=_text_or(raw.get("name"), DEFAULT_NAME),
        category=_text_or(raw.get("category"), None),
        price=price,
        stock=stock,
    )


def normalize_catalog(records: Iterable[Mapping[str, Any]]) -> list[Product]:
    return [normalize(record) for record in records]
