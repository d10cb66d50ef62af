"""Hierarchical collection and document references."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from artdrill.domain.exceptions import InvalidReference


def _split(path: str) -> tuple[str, ...]:
    if not isinstance(path, str) or not path.strip("/"):
        raise InvalidReference(f"Empty path: {path!r}")
    segments = tuple(path.strip("/").split("/"))
    if any(not s.strip() for s in segments):
        raise InvalidReference(f"Empty segment in path: {path!r}")
    return segments


def _check_segment(segment: str) -> str:
    if not isinstance(segment, str) or not segment.strip() or "/" in segment:
        raise InvalidReference(f"Invalid path segment: {segment!r}")
    return segment


@dataclass(frozen=True)
class CollectionReference:
    """Path to a collection - odd number of segments."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.segments) % 2 != 1:
            raise InvalidReference(f"Not a collection path: {'/'.join(self.segments)}")
        for s in self.segments:
            _check_segment(s)

    @classmethod
    def parse(cls, path: str) -> CollectionReference:
        return cls(_split(path))

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def id(self) -> str:
        return self.segments[-1]

    @property
    def parent(self) -> DocumentReference | None:
        """Owning document, or None for a root collection."""
        if len(self.segments) == 1:
            return None
        return DocumentReference(self.segments[:-1])

    def document(self, document_id: str | None = None) -> DocumentReference:
        """Reference to a document in this collection (random id when omitted)."""
        doc_id = document_id if document_id is not None else uuid4().hex
        return DocumentReference(self.segments + (_check_segment(doc_id),))

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class DocumentReference:
    """Path to a document - even number of segments."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments or len(self.segments) % 2 != 0:
            raise InvalidReference(f"Not a document path: {'/'.join(self.segments)}")
        for s in self.segments:
            _check_segment(s)

    @classmethod
    def parse(cls, path: str) -> DocumentReference:
        return cls(_split(path))

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def id(self) -> str:
        return self.segments[-1]

    @property
    def parent(self) -> CollectionReference:
        return CollectionReference(self.segments[:-1])

    def collection(self, name: str) -> CollectionReference:
        return CollectionReference(self.segments + (_check_segment(name),))

    def __str__(self) -> str:
        return self.path


def collection(path: str) -> CollectionReference:
    """Shorthand for CollectionReference.parse."""
    return CollectionReference.parse(path)


def document(path: str) -> DocumentReference:
    """Shorthand for DocumentReference.parse."""
    return DocumentReference.parse(path)
