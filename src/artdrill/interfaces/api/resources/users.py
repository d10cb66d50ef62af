"""User API resources."""

import falcon.asgi

from artdrill.application.ports import DocumentStore
from artdrill.application.use_cases.user.clear_user_record import ClearUserRecordUseCase
from artdrill.application.use_cases.user.update_user_record import (
    UpdateUserRecordUseCase,
    user_record_ref,
)
from artdrill.domain.exceptions import InvalidReference, NotFound, ValidationError
from artdrill.domain.value_objects import (
    DEFAULT_RECORD_ID,
    DocumentReference,
    UserRecordKind,
    collection,
)
from artdrill.interfaces.api.media import read_object
from artdrill.interfaces.api.resources.documents import DocumentResource

USERS = "users"


def _record_kind(kind: str) -> UserRecordKind:
    try:
        return UserRecordKind(kind)
    except ValueError:
        raise NotFound("User record kind", kind) from None


class UserResource(DocumentResource):
    """GET/PUT/DELETE /v1/users/{user_id} - delete purges every user subcollection."""

    kind = "User"

    def document_for(self, user_id: str) -> DocumentReference:
        return collection(USERS).document(user_id)


class UserRecordResource:
    """GET/PUT/DELETE /v1/users/{user_id}/{kind} - the user's default record of that kind."""

    def __init__(
        self,
        store: DocumentStore,
        update_record: UpdateUserRecordUseCase,
        clear_record: ClearUserRecordUseCase,
    ) -> None:
        self._store = store
        self._update_record = update_record
        self._clear_record = clear_record

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str, kind: str
    ) -> None:
        """Get default record, wrapped in a one-element list."""
        try:
            record_kind = _record_kind(kind)
            snapshot = await self._store.get(user_record_ref(user_id, record_kind))
            if not snapshot.exists:
                raise NotFound(f"Default {record_kind.value} record", user_id)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = [{"id": DEFAULT_RECORD_ID, **(snapshot.data or {})}]
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str, kind: str
    ) -> None:
        """Update default record; ``*ToAdd`` lists are appended without duplicates."""
        try:
            record_kind = _record_kind(kind)
            body = await read_object(req)
            await self._update_record.execute(user_id, record_kind, body)
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {"message": f"Default user {record_kind.value} document updated successfully."}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str, kind: str
    ) -> None:
        """Clear default record back to its empty state (the document stays)."""
        try:
            record_kind = _record_kind(kind)
            await self._clear_record.execute(user_id, record_kind)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {"message": f"User {record_kind.value} document cleared successfully."}
        resp.status = falcon.HTTP_200
