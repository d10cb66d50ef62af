"""Auth middleware - extracts user from a bearer token when one is sent."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates bearer tokens and sets req.context.user.

    ``req.context.user`` is None for requests without a valid token. Only
    resources that need an identity reject those.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            return
        token = auth[7:].strip()
        if token and self._keycloak:
            user = await self._keycloak.decode_token(token)
            if user:
                req.context.user = RequestUser(
                    user_id=user.user_id,
                    email=user.email,
                    username=user.username,
                )
