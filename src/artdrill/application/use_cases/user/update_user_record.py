"""Update user record use case."""

from datetime import UTC, datetime
from typing import Any

from artdrill.application.ports import DocumentStore
from artdrill.domain.exceptions import NotFound, ValidationError
from artdrill.domain.value_objects import (
    DEFAULT_RECORD_ID,
    ArrayUnion,
    DocumentReference,
    UserRecordKind,
)

# request key -> stored list field, merged by array union
_APPEND_FIELDS: dict[UserRecordKind, dict[str, str]] = {
    UserRecordKind.BADGES: {},
    UserRecordKind.GALLERY: {
        "artworkToAdd": "artworkGallery",
        "referenceToAdd": "referenceGallery",
    },
    UserRecordKind.PROGRESS: {
        "badgeListToAdd": "badgeList",
        "toDoListToAdd": "toDoList",
    },
    UserRecordKind.PROMPTS: {
        "promptThreadToAdd": "promptThread",
    },
}


def user_record_ref(user_id: str, kind: UserRecordKind) -> DocumentReference:
    """Reference to ``users/{user_id}/{kind}/default``."""
    return DocumentReference(("users", user_id, kind.value, DEFAULT_RECORD_ID))


def build_update_payload(kind: UserRecordKind, body: dict[str, Any]) -> dict[str, Any]:
    """Translate a request body into store field updates."""
    if kind is UserRecordKind.BADGES and body.get("newBadgeID"):
        return {
            "badgeList": ArrayUnion(body["newBadgeID"]),
            "lastUpdated": datetime.now(UTC).isoformat(),
        }

    append_fields = _APPEND_FIELDS[kind]
    payload: dict[str, Any] = {}
    for key, value in body.items():
        if key in append_fields:
            continue
        payload[key] = value
    for key, field in append_fields.items():
        values = body.get(key)
        if values is None:
            continue
        if not isinstance(values, list):
            raise ValidationError(f"{key} must be an array")
        if values:
            payload[field] = ArrayUnion(*values)
    return payload


class UpdateUserRecordUseCase:
    """Apply a partial update to one of a user's default records."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self, user_id: str, kind: UserRecordKind, body: dict[str, Any]) -> None:
        """Update record. Raises NotFound if the default record does not exist."""
        if not body:
            raise ValidationError("No fields provided for update.")
        payload = build_update_payload(kind, body)
        if not payload:
            raise ValidationError("No fields provided for update.")
        ref = user_record_ref(user_id, kind)
        try:
            await self._store.update(ref, payload)
        except NotFound:
            raise NotFound(f"Default {kind.value} record", user_id) from None
