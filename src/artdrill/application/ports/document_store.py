"""Document store port - hierarchical collections of JSON documents."""

from __future__ import annotations

from typing import Any, Protocol

from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.value_objects import CollectionReference, DocumentReference


class WriteBatch(Protocol):
    """Atomic group of deletes, committed all-or-nothing."""

    def delete(self, reference: DocumentReference) -> None: ...

    def __len__(self) -> int: ...

    async def commit(self) -> None: ...


class DocumentStore(Protocol):
    """Port for document persistence.

    Documents are ordered by id unless ``order_by`` names a field.
    Deleting a document never deletes its subcollections.
    """

    async def get(self, reference: DocumentReference) -> DocumentSnapshot: ...

    async def list(
        self,
        collection: CollectionReference,
        *,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]: ...

    async def add(self, collection: CollectionReference, data: dict[str, Any]) -> DocumentReference: ...

    async def create(self, reference: DocumentReference, data: dict[str, Any]) -> None: ...

    async def set(self, reference: DocumentReference, data: dict[str, Any]) -> None: ...

    async def update(self, reference: DocumentReference, fields: dict[str, Any]) -> None: ...

    async def delete(self, reference: DocumentReference) -> None: ...

    async def list_descendant_collections(
        self, reference: DocumentReference
    ) -> list[CollectionReference]:
        """Every non-empty collection at any depth below ``reference``.

        Collections under documents that do not exist themselves are included.
        """
        ...

    def batch(self) -> WriteBatch: ...
