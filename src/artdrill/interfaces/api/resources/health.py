"""Health check endpoints."""

import falcon.asgi

from artdrill.application.ports import DocumentStore
from artdrill.domain.value_objects import collection


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness; an unreachable store answers 503."""
        await self._store.list(collection("badges"), limit=1)
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
