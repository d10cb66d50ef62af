"""CORS middleware - adds Access-Control-* headers for the web client."""

import falcon.asgi

_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
_ALLOW_HEADERS = "Authorization, Content-Type"


def parse_origins(raw: str) -> list[str]:
    """Split a comma-separated origins setting."""
    return [o.strip() for o in raw.split(",") if o.strip()]


class CORSMiddleware:
    """Middleware that adds CORS headers and answers OPTIONS preflight.

    ``"*"`` in ``origins`` allows any origin. Requests from other origins get
    no Access-Control-Allow-Origin header and are left to the browser to block.
    """

    def __init__(self, origins: list[str]) -> None:
        self._allow_any = "*" in origins
        self._origins = [o for o in origins if o != "*"]

    def _allowed_origin(self, origin: str | None) -> str | None:
        if self._allow_any:
            return origin or "*"
        if origin and origin in self._origins:
            return origin
        return None

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        allowed = self._allowed_origin(req.get_header("Origin"))
        if not allowed:
            return
        resp.set_header("Access-Control-Allow-Origin", allowed)
        resp.set_header("Access-Control-Allow-Methods", _ALLOW_METHODS)
        resp.set_header("Access-Control-Allow-Headers", _ALLOW_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")
        resp.append_header("Vary", "Origin")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method == "OPTIONS":
            self._set_cors_headers(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        """Add CORS headers to every non-preflight response."""
        if req.method != "OPTIONS":
            self._set_cors_headers(req, resp)
