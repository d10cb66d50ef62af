"""Challenge category and challenge item API resources."""

from typing import Any

from artdrill.application.ports import DocumentStore
from artdrill.application.use_cases.challenge.add_challenge_item import (
    AddChallengeItemUseCase,
    ChallengeItemInput,
)
from artdrill.domain.exceptions import ValidationError
from artdrill.domain.value_objects import CollectionReference, DocumentReference, collection
from artdrill.interfaces.api.resources.documents import DocumentResource, DocumentsResource

CHALLENGES = "challenges"
CHALLENGE_ITEMS = "challengeItems"


def challenge_items(category_id: str) -> CollectionReference:
    return collection(CHALLENGES).document(category_id).collection(CHALLENGE_ITEMS)


class ChallengesResource(DocumentsResource):
    """GET/POST /v1/challenges.

    POST accepts an optional ``id`` to pick the category's document id
    (e.g. ``anatomy``); without it an id is generated.
    """

    kind = "Challenge category"

    def collection_for(self) -> CollectionReference:
        return collection(CHALLENGES)

    async def create(self, target: CollectionReference, body: dict[str, Any]) -> str:
        data = dict(body)
        category_id = data.pop("id", None)
        if category_id is None:
            return await super().create(target, data)
        if not isinstance(category_id, str):
            raise ValidationError("id must be a string")
        ref = target.document(category_id)
        await self._store.create(ref, data)
        return ref.id


class ChallengeResource(DocumentResource):
    """GET/PUT/DELETE /v1/challenges/{category_id}.

    DELETE purges challengeItems (and each item's difficulty levels) before
    the category document goes.
    """

    kind = "Challenge category"

    def document_for(self, category_id: str) -> DocumentReference:
        return collection(CHALLENGES).document(category_id)


class ChallengeItemsResource(DocumentsResource):
    """GET/POST /v1/challenges/{category_id}/items - ordered by ``order``."""

    kind = "Challenge item"
    order_by = "order"
    not_found_when_empty = True

    def __init__(self, store: DocumentStore, add_item: AddChallengeItemUseCase) -> None:
        super().__init__(store)
        self._add_item = add_item

    def collection_for(self, category_id: str) -> CollectionReference:
        return challenge_items(category_id)

    async def create(self, target: CollectionReference, body: dict[str, Any]) -> str:
        if body.get("timeLimit") is None:
            raise ValidationError("Missing required fields (description, title, timeLimit).")
        return await self._add_item.execute(
            target.parent,
            ChallengeItemInput(
                title=body.get("title") or "",
                description=body.get("description") or "",
                time_limit=body["timeLimit"],
            ),
        )


class ChallengeItemResource(DocumentResource):
    """GET/PUT/DELETE /v1/challenges/{category_id}/items/{item_id}."""

    kind = "Challenge item"

    def document_for(self, category_id: str, item_id: str) -> DocumentReference:
        return challenge_items(category_id).document(item_id)
