"""Generic collection and document resources.

Concrete resources subclass these and name the store path their route maps
to. Route fields reach ``collection_for`` / ``document_for`` as keyword
arguments.
"""

from typing import Any

import falcon.asgi

from artdrill.application.ports import DocumentStore
from artdrill.application.use_cases.purge.delete_document_tree import DeleteDocumentTreeUseCase
from artdrill.domain.entities import DocumentSnapshot
from artdrill.domain.exceptions import AlreadyExists, InvalidReference, NotFound, ValidationError
from artdrill.domain.value_objects import CollectionReference, DocumentReference
from artdrill.interfaces.api.media import missing_fields, read_object


class DocumentsResource:
    """GET/POST on a collection - list documents and add one."""

    kind = "Document"
    required_fields: tuple[str, ...] = ()
    order_by: str | None = None
    not_found_when_empty = False

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def collection_for(self, **params: str) -> CollectionReference:
        raise NotImplementedError

    def to_media(self, snapshot: DocumentSnapshot) -> dict[str, Any]:
        return snapshot.to_dict()

    async def create(self, target: CollectionReference, body: dict[str, Any]) -> str:
        """Store a new document and return its id."""
        ref = await self._store.add(target, body)
        return ref.id

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **params: str) -> None:
        """List every document in the collection."""
        try:
            collection = self.collection_for(**params)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        snapshots = await self._store.list(collection, order_by=self.order_by)
        if not snapshots and self.not_found_when_empty:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"No {self.kind.lower()} documents found in {collection}"}
            return

        resp.media = [self.to_media(s) for s in snapshots]
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **params: str) -> None:
        """Add a document to the collection."""
        try:
            collection = self.collection_for(**params)
            body = await read_object(req)
            missing = missing_fields(body, self.required_fields)
            if missing:
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")
            doc_id = await self.create(collection, body)
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except AlreadyExists as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        resp.media = {"id": doc_id, "message": f"{self.kind} added successfully."}
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET/PUT/DELETE on a single document."""

    kind = "Document"

    def __init__(self, store: DocumentStore, delete_tree: DeleteDocumentTreeUseCase) -> None:
        self._store = store
        self._delete_tree = delete_tree

    def document_for(self, **params: str) -> DocumentReference:
        raise NotImplementedError

    def to_media(self, snapshot: DocumentSnapshot) -> dict[str, Any]:
        return snapshot.to_dict()

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **params: str) -> None:
        """Get document."""
        try:
            ref = self.document_for(**params)
            snapshot = await self._store.get(ref)
            if not snapshot.exists:
                raise NotFound(self.kind, ref.id)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = self.to_media(snapshot)
        resp.status = falcon.HTTP_200

    def update_fields(self, body: dict[str, Any]) -> dict[str, Any]:
        """Fields written by PUT; the whole body unless overridden."""
        if not body:
            raise ValidationError("No fields provided for update.")
        return body

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **params: str) -> None:
        """Merge body fields into the existing document."""
        try:
            ref = self.document_for(**params)
            fields = self.update_fields(await read_object(req))
            try:
                await self._store.update(ref, fields)
            except NotFound:
                raise NotFound(self.kind, ref.id) from None
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {"message": f"{self.kind} updated successfully."}
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, **params: str) -> None:
        """Delete document after purging its subcollections."""
        try:
            ref = self.document_for(**params)
            await self._delete_tree.execute(ref, kind=self.kind)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {"message": f"{self.kind} deleted successfully."}
        resp.status = falcon.HTTP_200

