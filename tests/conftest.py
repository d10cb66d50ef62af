"""Pytest fixtures for ArtDrill tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.exceptions import (
    AlreadyExists,
    NotFound,
    StoreUnavailable,
    ValidationError,
)
from artdrill.domain.value_objects import (
    CollectionReference,
    DocumentReference,
    apply_field_updates,
    collection,
)


class ReadBudgetExceeded(Exception):
    """Raised by FakeDocumentStore when a test's read budget runs out."""


# --- Fake document store ---


class FakeWriteBatch:
    """In-memory write batch; deletes apply on commit."""

    def __init__(self, store: FakeDocumentStore) -> None:
        self._store = store
        self._refs: list[DocumentReference] = []

    def delete(self, reference: DocumentReference) -> None:
        self._refs.append(reference)

    def __len__(self) -> int:
        return len(self._refs)

    async def commit(self) -> None:
        if not self._refs:
            return
        self._store.commits.append(len(self._refs))
        if self._store.fail_commit_on == len(self._store.commits):
            raise StoreUnavailable("commit failed")
        for ref in self._refs:
            self._store._collections.get(ref.parent.path, {}).pop(ref.id, None)
        self._refs = []


class FakeDocumentStore:
    """In-memory hierarchical document store.

    Records every ``list`` call in ``reads`` as (collection path, documents
    returned) and every committed batch size in ``commits``.

    ``ReadBudgetExceeded`` is reachable as a class attribute so tests catch
    the exact class the fixture's store raises, whichever way this module
    was imported.
    """

    ReadBudgetExceeded = ReadBudgetExceeded

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.reads: list[tuple[str, int]] = []
        self.commits: list[int] = []
        self.fail_commit_on: int | None = None
        self.fail_read_on: int | None = None
        self.read_budget: int | None = None
        self.on_read: Callable[[FakeDocumentStore, CollectionReference], None] | None = None
        self.opened = False
        self.closed = False
        self._seq = 0

    # --- test helpers ---

    def seed(self, path: str, count: int = 0, docs: dict[str, dict[str, Any]] | None = None) -> list[str]:
        """Insert ``count`` generated documents and/or ``docs`` into a collection."""
        target = self._collections.setdefault(collection(path).path, {})
        ids = []
        for _ in range(count):
            self._seq += 1
            doc_id = f"doc-{self._seq:06d}"
            target[doc_id] = {"n": self._seq}
            ids.append(doc_id)
        for doc_id, data in (docs or {}).items():
            target[doc_id] = dict(data)
            ids.append(doc_id)
        return ids

    def count(self, path: str) -> int:
        return len(self._collections.get(path, {}))

    def data(self, path: str) -> dict[str, Any] | None:
        ref = DocumentReference.parse(path)
        return self._collections.get(ref.parent.path, {}).get(ref.id)

    # --- DocumentStore ---

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.closed = True

    async def get(self, reference: DocumentReference) -> DocumentSnapshot:
        data = self._collections.get(reference.parent.path, {}).get(reference.id)
        return DocumentSnapshot(reference=reference, data=dict(data) if data is not None else None)

    async def list(
        self,
        collection: CollectionReference,
        *,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        if self.read_budget is not None and len(self.reads) >= self.read_budget:
            raise self.ReadBudgetExceeded(f"more than {self.read_budget} reads")
        if self.fail_read_on == len(self.reads) + 1:
            self.reads.append((collection.path, 0))
            raise StoreUnavailable("read failed")
        if order_by and start_after is not None:
            raise ValidationError("start_after is only supported when ordering by id")

        docs = self._collections.get(collection.path, {})
        if order_by:
            present = sorted(
                (i for i in docs if docs[i].get(order_by) is not None),
                key=lambda i: (docs[i][order_by], i),
                reverse=descending,
            )
            ids = present + sorted(i for i in docs if docs[i].get(order_by) is None)
        else:
            ids = sorted(docs, reverse=descending)
        if start_after is not None:
            ids = [i for i in ids if (i < start_after if descending else i > start_after)]
        if limit is not None:
            ids = ids[:limit]

        page = [
            DocumentSnapshot(reference=collection.document(i), data=dict(docs[i])) for i in ids
        ]
        self.reads.append((collection.path, len(page)))
        if self.on_read is not None:
            self.on_read(self, collection)
        return page

    async def add(self, collection: CollectionReference, data: dict[str, Any]) -> DocumentReference:
        ref = collection.document(uuid4().hex)
        await self.create(ref, data)
        return ref

    async def create(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        docs = self._collections.setdefault(reference.parent.path, {})
        if reference.id in docs:
            raise AlreadyExists(f"Document already exists: {reference.path}")
        docs[reference.id] = dict(data)

    async def set(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        self._collections.setdefault(reference.parent.path, {})[reference.id] = dict(data)

    async def update(self, reference: DocumentReference, fields: dict[str, Any]) -> None:
        docs = self._collections.get(reference.parent.path, {})
        if reference.id not in docs:
            raise NotFound("Document", reference.path)
        docs[reference.id] = apply_field_updates(docs[reference.id], fields)

    async def delete(self, reference: DocumentReference) -> None:
        self._collections.get(reference.parent.path, {}).pop(reference.id, None)

    async def list_descendant_collections(
        self, reference: DocumentReference
    ) -> list[CollectionReference]:
        prefix = reference.path + "/"
        return [
            CollectionReference.parse(path)
            for path, docs in sorted(self._collections.items())
            if path.startswith(prefix) and docs
        ]

    def batch(self) -> FakeWriteBatch:
        return FakeWriteBatch(self)


# --- Fixtures ---


@pytest.fixture
def store() -> FakeDocumentStore:
    """Fresh in-memory document store for each test."""
    return FakeDocumentStore()


@pytest.fixture
def mock_chat_provider():
    """AsyncMock for ChatProvider - replies with a fixed drawing prompt."""
    mock = AsyncMock()
    mock.reply.return_value = "Draw a cat stretching in three minutes."
    return mock
