"""Falcon error handlers for errors that escape a resource."""

import logging

import falcon
import falcon.asgi

from artdrill.domain.exceptions import ChatUnavailable, StoreUnavailable

logger = logging.getLogger(__name__)


async def handle_unavailable(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """StoreUnavailable / ChatUnavailable -> 503."""
    logger.warning("%s %s failed: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_503
    resp.media = {"error": str(ex)}


async def handle_unexpected(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """Anything else -> logged with traceback, 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers; Falcon picks the most specific one per exception."""
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(StoreUnavailable, handle_unavailable)
    app.add_error_handler(ChatUnavailable, handle_unavailable)
