"""Badge API resources."""

from artdrill.domain.value_objects import CollectionReference, DocumentReference, collection
from artdrill.interfaces.api.resources.documents import DocumentResource, DocumentsResource

BADGES = "badges"


class BadgesResource(DocumentsResource):
    """GET/POST /v1/badges - list and add badges."""

    kind = "Badge"
    required_fields = ("name", "description", "image", "condition")

    def collection_for(self) -> CollectionReference:
        return collection(BADGES)


class BadgeResource(DocumentResource):
    """GET/PUT/DELETE /v1/badges/{badge_id}."""

    kind = "Badge"

    def document_for(self, badge_id: str) -> DocumentReference:
        return collection(BADGES).document(badge_id)
