"""Bounded collection purge use case."""

import asyncio
import logging

from artdrill.application.ports import DocumentStore
from artdrill.domain.exceptions import PurgeCancelled, ValidationError
from artdrill.domain.value_objects import CollectionReference

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class PurgeCollectionUseCase:
    """Delete every document in one collection, ``batch_size`` at a time.

    Each round reads up to ``batch_size`` documents and commits their deletes
    as one batch; the loop ends on the first empty read. Rounds run strictly
    in sequence. Subcollections of the deleted documents are left alone.

    Precondition: no concurrent writer inserts into the collection while the
    purge runs. A writer that keeps pace with the deletes keeps the loop alive.

    Errors from the store (``StoreUnavailable``, ``InvalidReference``) abort
    the purge with the collection partially deleted. Running it again is safe
    and deletes the remainder.
    """

    def __init__(self, store: DocumentStore, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValidationError("batch_size must be a positive integer")
        self._store = store
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def execute(
        self,
        collection: CollectionReference,
        batch_size: int | None = None,
        *,
        cancelled: asyncio.Event | None = None,
    ) -> None:
        """Purge ``collection``. Raises PurgeCancelled if ``cancelled`` is set between rounds."""
        size = self._batch_size if batch_size is None else batch_size
        if size < 1:
            raise ValidationError("batch_size must be a positive integer")

        rounds = 0
        deleted = 0
        while True:
            if cancelled is not None and cancelled.is_set():
                logger.info(
                    "Purge of %s cancelled after %d rounds (%d deleted)",
                    collection,
                    rounds,
                    deleted,
                )
                raise PurgeCancelled(f"Purge of {collection} cancelled")

            page = await self._store.list(collection, limit=size)
            if not page:
                break

            batch = self._store.batch()
            for snapshot in page:
                batch.delete(snapshot.reference)
            await batch.commit()

            rounds += 1
            deleted += len(page)
            logger.debug("Purge %s round %d: deleted %d", collection, rounds, len(page))

        logger.info("Purged %s: %d documents in %d rounds", collection, deleted, rounds)
