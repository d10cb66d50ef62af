"""Recursive document delete use case."""

import logging

from artdrill.application.ports import DocumentStore
from artdrill.application.use_cases.purge.purge_collection import PurgeCollectionUseCase
from artdrill.domain.exceptions import NotFound
from artdrill.domain.value_objects import DocumentReference

logger = logging.getLogger(__name__)


class DeleteDocumentTreeUseCase:
    """Delete a document after purging every collection nested below it.

    Descendant collections are found by path, so collections under documents
    that were never created (e.g. a difficulty level set for an unknown item)
    are purged as well. Deepest collections go first.
    """

    def __init__(self, store: DocumentStore, purge: PurgeCollectionUseCase) -> None:
        self._store = store
        self._purge = purge

    async def execute(self, reference: DocumentReference, kind: str = "Document") -> None:
        """Delete ``reference`` and its descendants. Raises NotFound if it does not exist."""
        snapshot = await self._store.get(reference)
        if not snapshot.exists:
            raise NotFound(kind, reference.id)

        descendants = await self._store.list_descendant_collections(reference)
        for child in sorted(descendants, key=lambda c: len(c.segments), reverse=True):
            await self._purge.execute(child)
        await self._store.delete(reference)
        logger.info("Deleted %s %s (%d subcollections)", kind.lower(), reference, len(descendants))
