"""Token validation and current-user endpoints."""

import falcon.asgi

from artdrill.application.ports import DocumentStore
from artdrill.domain.value_objects import collection


class ValidationResource:
    """POST /v1/validation - check a bearer token, return its subject."""

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Return ``{uid}`` for a valid token."""
        user = getattr(req.context, "user", None)
        if not user:
            auth = req.get_header("Authorization") or ""
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Invalid token" if auth.startswith("Bearer ") else "Unauthorized"}
            return

        resp.media = {"uid": user.user_id}
        resp.status = falcon.HTTP_200


class MeResource:
    """GET /v1/me - the authenticated user's document."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Get users/{uid} for the token's subject."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        snapshot = await self._store.get(collection("users").document(user.user_id))
        if not snapshot.exists:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "User not found"}
            return

        resp.media = snapshot.to_dict()
        resp.status = falcon.HTTP_200
