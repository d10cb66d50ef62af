"""Store lifespan middleware - opens the document store on startup, closes on shutdown."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StoreLifespanMiddleware:
    """Middleware that opens the document store on startup and closes it on shutdown."""

    def __init__(self, store) -> None:
        self._store = store

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open store when ASGI server starts."""
        await self._store.open()
        logger.info("Document store opened (%s)", type(self._store).__name__)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close store when ASGI server shuts down."""
        await self._store.close()
        logger.info("Document store closed")
