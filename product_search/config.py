"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    catalog_path: str = _get_env("CATALOG_PATH", "mock_products.json")
    host: str = _get_env("HOST", "127.0.0.1")
    port: int = int(_get_env("PORT", "4000"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")
    max_body_bytes: int = int(_get_env("MAX_BODY_BYTES", str(1024 * 1024)))


settings = Settings()
