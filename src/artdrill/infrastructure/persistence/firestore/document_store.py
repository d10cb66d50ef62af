"""Cloud Firestore document store implementation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from google.api_core import exceptions as gexc
from google.cloud import firestore
from google.cloud.firestore_v1.field_path import FieldPath

from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.exceptions import (
    AlreadyExists,
    InvalidReference,
    NotFound,
    StoreUnavailable,
    ValidationError,
)
from artdrill.domain.value_objects import ArrayUnion, CollectionReference, DocumentReference


def _to_firestore_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Build ``update()`` arguments from top-level field updates.

    Keys are quoted as single field paths so ``"a.b"`` names one top-level
    field, not a nested one. ArrayUnion markers become Firestore transforms
    and empty unions are dropped.
    """
    return {
        FieldPath(k).to_api_repr(): (
            firestore.ArrayUnion(list(v.values)) if isinstance(v, ArrayUnion) else v
        )
        for k, v in fields.items()
        if not (isinstance(v, ArrayUnion) and not v.values)
    }


@contextmanager
def _translate_errors(path: str) -> Iterator[None]:
    try:
        yield
    except (gexc.PermissionDenied, gexc.InvalidArgument) as e:
        raise InvalidReference(f"{path}: {e.message}") from e
    except (gexc.GoogleAPICallError, gexc.RetryError) as e:
        raise StoreUnavailable(f"{path}: {e}") from e


class FirestoreWriteBatch:
    """Wraps a Firestore AsyncWriteBatch (max 500 writes per commit)."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client
        self._batch = client.batch()
        self._count = 0

    def delete(self, reference: DocumentReference) -> None:
        self._batch.delete(self._client.document(reference.path))
        self._count += 1

    def __len__(self) -> int:
        return self._count

    async def commit(self) -> None:
        if not self._count:
            return
        with _translate_errors("batch"):
            await self._batch.commit()
        self._batch = self._client.batch()
        self._count = 0


class FirestoreDocumentStore:
    """Document store backed by google-cloud-firestore AsyncClient."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def get(self, reference: DocumentReference) -> DocumentSnapshot:
        with _translate_errors(reference.path):
            snap = await self._client.document(reference.path).get()
        return DocumentSnapshot(reference=reference, data=snap.to_dict() if snap.exists else None)

    async def list(
        self,
        collection: CollectionReference,
        *,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        if order_by and start_after is not None:
            raise ValidationError("start_after is only supported when ordering by id")
        coll = self._client.collection(collection.path)
        direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
        query = coll.order_by(order_by or "__name__", direction=direction)
        if start_after is not None:
            query = query.start_after({"__name__": coll.document(start_after)})
        if limit is not None:
            query = query.limit(limit)
        with _translate_errors(collection.path):
            return [
                DocumentSnapshot(reference=collection.document(snap.id), data=snap.to_dict())
                async for snap in query.stream()
            ]

    async def add(self, collection: CollectionReference, data: dict[str, Any]) -> DocumentReference:
        with _translate_errors(collection.path):
            _, doc_ref = await self._client.collection(collection.path).add(data)
        return collection.document(doc_ref.id)

    async def create(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        with _translate_errors(reference.path):
            try:
                await self._client.document(reference.path).create(data)
            except gexc.Conflict as e:
                raise AlreadyExists(f"Document already exists: {reference.path}") from e

    async def set(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        with _translate_errors(reference.path):
            await self._client.document(reference.path).set(data)

    async def update(self, reference: DocumentReference, fields: dict[str, Any]) -> None:
        with _translate_errors(reference.path):
            try:
                await self._client.document(reference.path).update(_to_firestore_fields(fields))
            except gexc.NotFound as e:
                raise NotFound("Document", reference.path) from e

    async def delete(self, reference: DocumentReference) -> None:
        with _translate_errors(reference.path):
            await self._client.document(reference.path).delete()

    async def list_descendant_collections(
        self, reference: DocumentReference
    ) -> list[CollectionReference]:
        """Walk subcollections depth-first.

        ``list_documents`` also yields missing documents that only exist as
        parents of subcollections, so those are walked too.
        """
        found: list[CollectionReference] = []
        pending = [(reference, self._client.document(reference.path))]
        with _translate_errors(reference.path):
            while pending:
                ref, native = pending.pop()
                async for coll in native.collections():
                    child = ref.collection(coll.id)
                    found.append(child)
                    async for doc in coll.list_documents():
                        pending.append((child.document(doc.id), doc))
        return found

    def batch(self) -> FirestoreWriteBatch:
        return FirestoreWriteBatch(self._client)
