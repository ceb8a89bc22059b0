"""Explicit server object owning the uvicorn listener lifecycle."""
from __future__ import annotations

import logging
import threading
import time

import uvicorn

from .catalog import CatalogSource
from .config import Settings, settings
from .main import create_app

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT_SECONDS = 10.0


class SearchServer:
    """Binds the search app to ``host:port``; ``start`` and ``close`` bracket its life."""

    def __init__(self, config: Settings | None = None, catalog: CatalogSource | None = None) -> None:
        self.settings = config or settings
        self.app = create_app(self.settings, catalog)
        self._server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=self.settings.host,
                port=self.settings.port,
                log_config=None,
                log_level=self.settings.log_level.lower(),
            )
        )
        self._thread: threading.Thread | None = None

    @property
    def started(self) -> bool:
        return self._thread is not None and self._server.started

    @property
    def bound_port(self) -> int:
        """Actual listening port, useful when configured with port 0."""
        for server in self._server.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self.settings.port

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Server already started")
        self._thread = threading.Thread(target=self._server.run, name="search-server", daemon=True)
        self._thread.start()
        deadline = time.monotonic() + STARTUP_TIMEOUT_SECONDS
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self.close()
                raise RuntimeError(f"Server failed to start on {self.settings.host}:{self.settings.port}")
            time.sleep(0.01)
        logger.info("Server running at http://%s:%s", self.settings.host, self.bound_port)

    def serve_forever(self) -> None:
        logger.info("Server running at http://%s:%s", self.settings.host, self.settings.port)
        self._server.run()

    def close(self) -> None:
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=STARTUP_TIMEOUT_SECONDS)
            self._thread = None
        logger.info("Server stopped")

    def __enter__(self) -> "SearchServer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def main() -> int:
    SearchServer().serve_forever()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
