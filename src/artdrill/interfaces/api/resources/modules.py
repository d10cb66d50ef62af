"""Learning module API resources."""

from artdrill.domain.value_objects import CollectionReference, DocumentReference, collection
from artdrill.interfaces.api.resources.documents import DocumentResource, DocumentsResource

MODULES = "modules"
MODULE_ITEMS = "moduleItems"


class ModulesResource(DocumentsResource):
    """GET/POST /v1/modules."""

    kind = "Module"

    def collection_for(self) -> CollectionReference:
        return collection(MODULES)


class ModuleResource(DocumentResource):
    """GET/PUT/DELETE /v1/modules/{module_id} - delete purges moduleItems first."""

    kind = "Module"

    def document_for(self, module_id: str) -> DocumentReference:
        return collection(MODULES).document(module_id)


class ModuleItemsResource(DocumentsResource):
    """GET/POST /v1/modules/{module_id}/items."""

    kind = "Module item"
    required_fields = ("image", "link", "title")

    def collection_for(self, module_id: str) -> CollectionReference:
        return collection(MODULES).document(module_id).collection(MODULE_ITEMS)


class ModuleItemResource(DocumentResource):
    """GET/PUT/DELETE /v1/modules/{module_id}/items/{item_id}."""

    kind = "Module item"

    def document_for(self, module_id: str, item_id: str) -> DocumentReference:
        return collection(MODULES).document(module_id).collection(MODULE_ITEMS).document(item_id)
