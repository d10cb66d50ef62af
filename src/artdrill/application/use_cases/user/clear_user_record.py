"""Clear user record use case."""

from datetime import UTC, datetime
from typing import Any

from artdrill.application.ports import DocumentStore
from artdrill.application.use_cases.user.update_user_record import user_record_ref
from artdrill.domain.exceptions import NotFound
from artdrill.domain.value_objects import UserRecordKind


def cleared_fields(kind: UserRecordKind, now: str) -> dict[str, Any]:
    """Field values a cleared record is reset to."""
    if kind is UserRecordKind.BADGES:
        return {"badgeList": [], "fulfilled": False, "lastCleared": now}
    if kind is UserRecordKind.GALLERY:
        return {"artworkGallery": [], "referenceGallery": [], "lastCleared": now}
    if kind is UserRecordKind.PROGRESS:
        return {"badgeList": [], "progress": 0, "toDoList": [], "lastCleared": now}
    return {
        "aiModel": "default_model",
        "isActive": True,
        "promptThread": [],
        "timeCreated": now,
        "lastCleared": now,
    }


class ClearUserRecordUseCase:
    """Reset one of a user's default records to its empty state."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self, user_id: str, kind: UserRecordKind) -> None:
        """Clear record. Raises NotFound if the default record does not exist."""
        now = datetime.now(UTC).isoformat()
        try:
            await self._store.update(user_record_ref(user_id, kind), cleared_fields(kind, now))
        except NotFound:
            raise NotFound(f"Default {kind.value} record", user_id) from None
