"""Validation of untrusted search request bodies."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping

from .models import FieldError, SearchFilter

logger = logging.getLogger(__name__)

MUST_BE_STRING = "Must be a string"
MUST_BE_NUMBER = "Must be a number"
MUST_BE_BOOLEAN = "Must be true or false"
PRICE_RANGE_INVERTED = "minPrice cannot be greater than maxPrice"
INVALID_JSON = "Invalid JSON"


class FieldState(Enum):
    ABSENT = "absent"
    VALID = "valid"
    WRONG_TYPE = "wrong_type"


@dataclass(frozen=True)
class RequestField:
    """One request field read from the raw body, classified before use."""

    name: str
    state: FieldState
    value: Any = None


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def read_field(body: Mapping[str, Any], name: str, accepts: Callable[[Any], bool]) -> RequestField:
    """Classify ``body[name]``. An explicit ``null`` is present and wrongly typed."""
    if name not in body:
        return RequestField(name, FieldState.ABSENT)
    value = body[name]
    if accepts(value):
        return RequestField(name, FieldState.VALID, value)
    return RequestField(name, FieldState.WRONG_TYPE, value)


def validate(body: Mapping[str, Any]) -> tuple[SearchFilter, list[FieldError]]:
    """Turn a parsed request body into a filter plus the list of field errors.

    Every field is checked independently so all problems are reported at once.
    The price range check only runs when both prices are valid numbers. The
    returned filter holds the fields that passed and must be discarded by the
    caller whenever the error list is not empty.
    """
    errors: list[FieldError] = []
    accepted: dict[str, Any] = {}

    checks = (
        ("category", _is_string, MUST_BE_STRING),
        ("minPrice", _is_number, MUST_BE_NUMBER),
        ("maxPrice", _is_number, MUST_BE_NUMBER),
    )
    for name, accepts, message in checks:
        field = read_field(body, name, accepts)
        if field.state is FieldState.WRONG_TYPE:
            errors.append(FieldError(field=name, message=message))
        elif field.state is FieldState.VALID:
            accepted[name] = field.value

    if "minPrice" in accepted and "maxPrice" in accepted and accepted["minPrice"] > accepted["maxPrice"]:
        errors.append(FieldError(field="minPrice", message=PRICE_RANGE_INVERTED))

    in_stock_only = read_field(body, "inStockOnly", _is_boolean)
    if in_stock_only.state is FieldState.WRONG_TYPE:
        errors.append(FieldError(field="inStockOnly", message=MUST_BE_BOOLEAN))
    elif in_stock_only.state is FieldState.VALID:
        accepted["inStockOnly"] = in_stock_only.value

    if errors:
        logger.debug("Rejected search request fields=%s", [error.field for error in errors])
    return SearchFilter.model_validate(accepted), errors


class InvalidJSONBody(ValueError):
    """Request body is not parsable JSON."""


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {token}")


def parse_body(raw: bytes | str) -> Dict[str, Any]:
    """Parse a buffered request body into the mapping handed to :func:`validate`.

    An empty body means "no constraints". JSON values other than objects carry
    no fields and also mean "no constraints", except ``null``, which is
    rejected.
    """
    if not raw:
        return {}
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise InvalidJSONBody(INVALID_JSON) from exc
    if parsed is None:
        raise InvalidJSONBody("Expected a JSON value other than null")
    if not isinstance(parsed, dict):
        logger.debug("Non-object body of type %s treated as empty", type(parsed).__name__)
        return {}
    return parsed
