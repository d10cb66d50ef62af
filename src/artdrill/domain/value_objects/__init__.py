"""Domain value objects."""

from artdrill.domain.value_objects.array_union import ArrayUnion, apply_field_updates
from artdrill.domain.value_objects.difficulty_level import DifficultyLevel
from artdrill.domain.value_objects.document_path import (
    CollectionReference,
    DocumentReference,
    collection,
    document,
)
from artdrill.domain.value_objects.user_record_kind import DEFAULT_RECORD_ID, UserRecordKind

__all__ = [
    "DEFAULT_RECORD_ID",
    "ArrayUnion",
    "CollectionReference",
    "DifficultyLevel",
    "DocumentReference",
    "UserRecordKind",
    "apply_field_updates",
    "collection",
    "document",
]
