"""Catalog sources feeding raw product records to the search pipeline."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when the catalog cannot be read or is not a list of records."""


class CatalogSource(Protocol):
    def load(self) -> List[Dict[str, Any]]: ...


def _check_records(data: Any, origin: str) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {origin} must contain a JSON array, got {type(data).__name__}")
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise CatalogError(f"Catalog {origin} entry {idx} is not an object")
    return data


@dataclass
class FileCatalog:
    """JSON array on disk, re-read on every :meth:`load`."""

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def load(self) -> List[Dict[str, Any]]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Failed to read catalog {self.path}") from exc
        records = _check_records(data, str(self.path))
        logger.debug("Loaded %s records from %s", len(records), self.path)
        return records


@dataclass
class InMemoryCatalog:
    records: List[Dict[str, Any]] = field(default_factory=list)

    def load(self) -> List[Dict[str, Any]]:
        return list(_check_records(self.records, "<memory>"))
