"""Per-user record kinds."""

from enum import StrEnum

DEFAULT_RECORD_ID = "default"


class UserRecordKind(StrEnum):
    """Subcollection under ``users/{userId}`` holding a ``default`` record."""

    BADGES = "badges"
    GALLERY = "gallery"
    PROGRESS = "progress"
    PROMPTS = "prompts"
