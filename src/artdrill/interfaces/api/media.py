"""Request body helpers."""

from typing import Any

import falcon.asgi

from artdrill.domain.exceptions import ValidationError


async def read_object(req: falcon.asgi.Request) -> dict[str, Any]:
    """JSON object body; an empty body reads as ``{}``."""
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def missing_fields(body: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    """Required keys that are absent or falsy."""
    return [f for f in required if not body.get(f)]
