"""PostgreSQL document store implementation.

All documents live in one table keyed by (collection_path, id) with a JSONB
body. Subcollections are just longer collection paths, so deleting a row
never touches its subcollections.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from psycopg import AsyncConnection
from psycopg import errors as pg_errors
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.exceptions import (
    AlreadyExists,
    InvalidReference,
    NotFound,
    StoreUnavailable,
    ValidationError,
)
from artdrill.domain.value_objects import (
    CollectionReference,
    DocumentReference,
    apply_field_updates,
)


def _build_list_query(
    collection_path: str,
    *,
    limit: int | None,
    order_by: str | None,
    descending: bool,
    start_after: str | None,
) -> tuple[str, list[object]]:
    """Build SELECT for a collection page. Returns (query, params)."""
    if order_by and start_after is not None:
        raise ValidationError("start_after is only supported when ordering by id")
    q = "SELECT id, data FROM document WHERE collection_path = %s"
    params: list[object] = [collection_path]
    if start_after is not None:
        q += " AND id < %s" if descending else " AND id > %s"
        params.append(start_after)
    if order_by:
        direction = "DESC" if descending else "ASC"
        q += f" ORDER BY data -> %s {direction} NULLS LAST, id"
        params.append(order_by)
    else:
        q += " ORDER BY id DESC" if descending else " ORDER BY id"
    if limit is not None:
        q += " LIMIT %s"
        params.append(limit)
    return q, params


def _like_prefix(path: str) -> str:
    """LIKE pattern matching every path below ``path``."""
    escaped = path.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped + "/%"


def _descendant_collections(parent_path: str, paths: list[str]) -> list[str]:
    """Keep collection paths nested anywhere below ``parent_path``."""
    prefix = parent_path + "/"
    return sorted({p for p in paths if p.startswith(prefix)})


class PostgresWriteBatch:
    """Delete batch committed in a single transaction."""

    def __init__(self, store: PostgresDocumentStore) -> None:
        self._store = store
        self._refs: list[DocumentReference] = []

    def delete(self, reference: DocumentReference) -> None:
        self._refs.append(reference)

    def __len__(self) -> int:
        return len(self._refs)

    async def commit(self) -> None:
        """Commit all deletes atomically."""
        if not self._refs:
            return
        by_collection: dict[str, list[str]] = {}
        for ref in self._refs:
            by_collection.setdefault(ref.parent.path, []).append(ref.id)
        async with self._store.connection() as conn:
            async with conn.transaction():
                for path, ids in by_collection.items():
                    await conn.execute(
                        "DELETE FROM document WHERE collection_path = %s AND id = ANY(%s)",
                        (path, ids),
                    )
        self._refs = []


class PostgresDocumentStore:
    """Document store backed by a psycopg async connection pool."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Pooled connection; driver failures surface as domain errors."""
        try:
            async with self._pool.connection() as conn:
                yield conn
        except pg_errors.InsufficientPrivilege as e:
            raise InvalidReference(str(e)) from e
        except (pg_errors.OperationalError, pg_errors.InterfaceError, PoolTimeout) as e:
            raise StoreUnavailable(str(e)) from e

    async def get(self, reference: DocumentReference) -> DocumentSnapshot:
        """Get document by reference."""
        async with self.connection() as conn:
            cur = await conn.execute(
                "SELECT data FROM document WHERE collection_path = %s AND id = %s",
                (reference.parent.path, reference.id),
            )
            r = await cur.fetchone()
        return DocumentSnapshot(reference=reference, data=r[0] if r else None)

    async def list(
        self,
        collection: CollectionReference,
        *,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        """List documents in a collection."""
        q, params = _build_list_query(
            collection.path,
            limit=limit,
            order_by=order_by,
            descending=descending,
            start_after=start_after,
        )
        async with self.connection() as conn:
            cur = await conn.execute(q, tuple(params))
            rows = await cur.fetchall()
        return [DocumentSnapshot(reference=collection.document(r[0]), data=r[1]) for r in rows]

    async def add(self, collection: CollectionReference, data: dict[str, Any]) -> DocumentReference:
        """Create document with a generated id."""
        ref = collection.document(uuid4().hex)
        await self.create(ref, data)
        return ref

    async def create(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        """Create document. Raises AlreadyExists if the id is taken."""
        async with self.connection() as conn:
            cur = await conn.execute(
                "INSERT INTO document (collection_path, id, data, created_at, updated_at) "
                "VALUES (%s, %s, %s, NOW(), NOW()) "
                "ON CONFLICT (collection_path, id) DO NOTHING RETURNING id",
                (reference.parent.path, reference.id, Jsonb(data)),
            )
            created = await cur.fetchone()
        if not created:
            raise AlreadyExists(f"Document already exists: {reference.path}")

    async def set(self, reference: DocumentReference, data: dict[str, Any]) -> None:
        """Create or overwrite document."""
        async with self.connection() as conn:
            await conn.execute(
                "INSERT INTO document (collection_path, id, data, created_at, updated_at) "
                "VALUES (%s, %s, %s, NOW(), NOW()) "
                "ON CONFLICT (collection_path, id) "
                "DO UPDATE SET data = EXCLUDED.data, updated_at = NOW()",
                (reference.parent.path, reference.id, Jsonb(data)),
            )

    async def update(self, reference: DocumentReference, fields: dict[str, Any]) -> None:
        """Merge top-level fields into an existing document."""
        async with self.connection() as conn:
            async with conn.transaction():
                cur = await conn.execute(
                    "SELECT data FROM document WHERE collection_path = %s AND id = %s FOR UPDATE",
                    (reference.parent.path, reference.id),
                )
                r = await cur.fetchone()
                if not r:
                    raise NotFound("Document", reference.path)
                merged = apply_field_updates(r[0] or {}, fields)
                await conn.execute(
                    "UPDATE document SET data = %s, updated_at = NOW() "
                    "WHERE collection_path = %s AND id = %s",
                    (Jsonb(merged), reference.parent.path, reference.id),
                )

    async def delete(self, reference: DocumentReference) -> None:
        """Delete document (no-op if missing)."""
        async with self.connection() as conn:
            await conn.execute(
                "DELETE FROM document WHERE collection_path = %s AND id = %s",
                (reference.parent.path, reference.id),
            )

    async def list_descendant_collections(
        self, reference: DocumentReference
    ) -> list[CollectionReference]:
        """Every collection below a document that holds at least one document."""
        async with self.connection() as conn:
            cur = await conn.execute(
                "SELECT DISTINCT collection_path FROM document WHERE collection_path LIKE %s",
                (_like_prefix(reference.path),),
            )
            rows = await cur.fetchall()
        paths = _descendant_collections(reference.path, [r[0] for r in rows])
        return [CollectionReference.parse(p) for p in paths]

    def batch(self) -> PostgresWriteBatch:
        return PostgresWriteBatch(self)
