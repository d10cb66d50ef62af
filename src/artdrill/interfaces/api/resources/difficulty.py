"""Difficulty level API resources.

Each challenge item keeps one document per level under ``difficulty``, keyed
by the level name, holding the image gallery for that level.
"""

from typing import Any

import falcon.asgi

from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.exceptions import InvalidReference, NotFound, ValidationError
from artdrill.domain.value_objects import CollectionReference, DifficultyLevel, DocumentReference
from artdrill.interfaces.api.media import read_object
from artdrill.interfaces.api.resources.challenges import challenge_items
from artdrill.interfaces.api.resources.documents import DocumentResource, DocumentsResource

DIFFICULTY = "difficulty"


def _gallery(body: dict[str, Any]) -> list[Any]:
    gallery = body.get("gallery")
    if not isinstance(gallery, list):
        raise ValidationError('Missing or invalid "gallery" field (must be an array of URLs).')
    return gallery


class DifficultyResource(DocumentsResource):
    """GET/POST /v1/challenges/{category_id}/items/{item_id}/difficulty."""

    kind = "Difficulty level"
    not_found_when_empty = True

    def collection_for(self, category_id: str, item_id: str) -> CollectionReference:
        return challenge_items(category_id).document(item_id).collection(DIFFICULTY)

    def to_media(self, snapshot: DocumentSnapshot) -> dict[str, Any]:
        return snapshot.to_dict(id_key="level")

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        category_id: str,
        item_id: str,
    ) -> None:
        """Create or overwrite the gallery for one level."""
        try:
            body = await read_object(req)
            raw_level = body.get("difficultyLevel")
            gallery = _gallery(body)
            try:
                level = DifficultyLevel(raw_level)
            except ValueError:
                raise ValidationError(
                    'Invalid difficultyLevel. Must be "easy", "medium", or "hard".'
                ) from None
            ref = self.collection_for(category_id, item_id).document(level.value)
            await self._store.set(ref, {"gallery": gallery})
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {"level": level.value, "message": f"Difficulty level '{level}' saved."}
        resp.status = falcon.HTTP_201


class DifficultyLevelResource(DocumentResource):
    """GET/PUT/DELETE /v1/challenges/{category_id}/items/{item_id}/difficulty/{level}."""

    kind = "Difficulty level"

    def document_for(self, category_id: str, item_id: str, level: str) -> DocumentReference:
        try:
            parsed = DifficultyLevel(level)
        except ValueError:
            raise NotFound(self.kind, level) from None
        return (
            challenge_items(category_id)
            .document(item_id)
            .collection(DIFFICULTY)
            .document(parsed.value)
        )

    def to_media(self, snapshot: DocumentSnapshot) -> dict[str, Any]:
        return snapshot.to_dict(id_key="level")

    def update_fields(self, body: dict[str, Any]) -> dict[str, Any]:
        return {"gallery": _gallery(body)}
