"""FastAPI application wiring the catalog search endpoint."""
from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import CatalogError, CatalogSource, FileCatalog
from .config import Settings, settings
from .models import SearchResponse
from .normalizer import normalize_catalog
from .search import search
from .validation import INVALID_JSON, InvalidJSONBody, parse_body, validate

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# Force a predictable logging setup even when run under uvicorn. ``force=True``
# replaces uvicorn's default handlers.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)

SEARCH_PATH = "/products/search"
class BodyTooLarge(Exception):
    pass


async def read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise BodyTooLarge()
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise BodyTooLarge()
    return bytes(body)


def error_response(status_code: int, code: str, **fields: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, **fields}})


def create_app(config: Settings | None = None, catalog: CatalogSource | None = None) -> FastAPI:
    """Build the service around a catalog source.

    Without an explicit ``catalog`` the JSON file at ``config.catalog_path``
    is read on every search request.
    """
    config = config or settings
    app = FastAPI(
        title="Product Search Service",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = config
    app.state.catalog = catalog if catalog is not None else FileCatalog(config.catalog_path)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and wrong methods on the search path look the same.
        if exc.status_code in (404, 405):
            return error_response(404, "NOT_FOUND", message="Route not found")
        return error_response(exc.status_code, "HTTP_ERROR", message=str(exc.detail))

    @app.exception_handler(CatalogError)
    async def catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        logger.exception("Catalog load failed: %s", exc)
        return error_response(500, "INTERNAL_ERROR", message="Catalog unavailable")

    @app.post(SEARCH_PATH, response_model=SearchResponse)
    async def search_products(request: Request):
        # The route matches the full request target, query string included.
        if request.scope.get("query_string"):
            raise StarletteHTTPException(status_code=404)
        try:
            raw = await read_body(request, config.max_body_bytes)
        except BodyTooLarge:
            logger.info("Rejected body larger than %s bytes", config.max_body_bytes)
            return error_response(413, "PAYLOAD_TOO_LARGE", message="Request body too large")

        try:
            body = parse_body(raw)
        except InvalidJSONBody as exc:
            logger.info("Rejected search body: %s", exc)
            return error_response(400, "BAD_REQUEST", details=[INVALID_JSON])

        filters, errors = validate(body)
        if errors:
            logger.info("Rejected search filters: %s", [error.model_dump() for error in errors])
            return error_response(400, "BAD_REQUEST", details=[error.model_dump() for error in errors])

        t0 = perf_counter()
        records = await asyncio.to_thread(request.app.state.catalog.load)
        products = normalize_catalog(records)
        items = search(products, filters)
        logger.info(
            "search filters=%s catalog=%s hits=%s took=%.2fms",
            filters.as_request(),
            len(products),
            len(items),
            (perf_counter() - t0) * 1000,
        )
        return SearchResponse(total=len(items), items=items)

    return app


app = create_app()
