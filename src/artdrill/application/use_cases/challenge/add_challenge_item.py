"""Add challenge item use case."""

from dataclasses import dataclass

from artdrill.application.ports import DocumentStore
from artdrill.domain.exceptions import ValidationError
from artdrill.domain.value_objects import CollectionReference, DocumentReference


@dataclass
class ChallengeItemInput:
    """Input for creating a challenge item."""

    title: str
    description: str
    time_limit: int


class AddChallengeItemUseCase:
    """Append a challenge item to a category with the next ``order`` value."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self, category: DocumentReference, input_data: ChallengeItemInput) -> str:
        """Create the item and return its generated id."""
        if not input_data.title or not input_data.description:
            raise ValidationError("Missing required fields (description, title, timeLimit).")
        if isinstance(input_data.time_limit, bool) or not isinstance(input_data.time_limit, int):
            raise ValidationError("timeLimit must be an integer.")

        items = category.collection("challengeItems")
        order = await self._next_order(items)
        ref = await self._store.add(
            items,
            {
                "description": input_data.description,
                "title": input_data.title,
                "timeLimit": input_data.time_limit,
                "order": order,
            },
        )
        return ref.id

    async def _next_order(self, items: CollectionReference) -> int:
        last = await self._store.list(items, order_by="order", descending=True, limit=1)
        if not last:
            return 1
        current = (last[0].data or {}).get("order")
        return current + 1 if isinstance(current, int) else 1
