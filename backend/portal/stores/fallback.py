"""Remote-store-with-local-fallback collections."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from portal.connectors import BaseDocumentStore, DocumentStoreError
from portal.core.locks import named_lock
from portal.stores.local_cache import LocalCache

logger = logging.getLogger(__name__)

# Errors that make a collection fall back to the local cache
REMOTE_ERRORS = (DocumentStoreError, ValueError)


@dataclass(frozen=True)
class CollectionSpec:
    """Where a collection lives remotely and locally."""

    name: str
    cache_key: str
    seeded_flag: str
    id_field: str = "id"


def _matches(record: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    if not filters:
        return True
    return all(record.get(field) == value for field, value in filters.items())


class FallbackCollection:
    """A collection read from and written to the remote store when possible.

    Successful remote calls are mirrored into the local cache. Failed calls,
    or every call when no remote store is configured, are served by the local
    cache alone. There is no conflict detection: the last write observed by
    either side wins. Rewrites of the cached array hold the lock of its cache
    key, so concurrent writes to different records keep each other.
    """

    def __init__(
        self,
        spec: CollectionSpec,
        local: LocalCache,
        remote: Optional[BaseDocumentStore] = None,
    ):
        self.spec = spec
        self.local = local
        self.remote = remote

    def _id(self, document: Dict[str, Any]) -> str:
        return document[self.spec.id_field]

    async def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """List documents, optionally filtered by field equality."""
        if self.remote is not None:
            try:
                documents = await self.remote.list_documents(self.spec.name, filters)
            except REMOTE_ERRORS as e:
                logger.warning(
                    "Error listing %s from the document store, falling back to local cache: %s",
                    self.spec.name, e,
                )
            else:
                await self._mirror_list(documents, filters)
                return documents
        else:
            logger.warning("Document store not configured, listing %s from local cache", self.spec.name)

        records = await self.local.read_records(self.spec.cache_key)
        return [record for record in records if _matches(record, filters)]

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get one document by id, or None when neither side has it."""
        if not doc_id:
            return None
        if self.remote is not None:
            try:
                document = await self.remote.get_document(self.spec.name, doc_id)
            except REMOTE_ERRORS as e:
                logger.warning(
                    "Error fetching %s/%s from the document store, falling back to local cache: %s",
                    self.spec.name, doc_id, e,
                )
            else:
                if document is not None:
                    await self._mirror(document)
                    return document

        for record in await self.local.read_records(self.spec.cache_key):
            if record.get(self.spec.id_field) == doc_id:
                logger.warning("Serving %s/%s from local cache", self.spec.name, doc_id)
                return record
        return None

    async def put(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace a document. Always succeeds locally."""
        doc_id = self._id(document)
        if self.remote is not None:
            try:
                await self.remote.set_document(self.spec.name, doc_id, document)
            except REMOTE_ERRORS as e:
                logger.warning(
                    "Error writing %s/%s to the document store, writing local cache only: %s",
                    self.spec.name, doc_id, e,
                )
        else:
            logger.info("Document store not configured, writing %s/%s to local cache only", self.spec.name, doc_id)

        await self._mirror(document)
        return document

    async def ensure_seeded(self, documents: List[Dict[str, Any]]) -> None:
        """Seed the local cache once, and the remote store if its first seed document is missing."""
        async with self._lock():
            if await self.local.get_item(self.spec.seeded_flag) != "true":
                await self.local.write_records(self.spec.cache_key, documents)
                await self.local.set_item(self.spec.seeded_flag, "true")
                logger.info("Seeded %d %s into local cache", len(documents), self.spec.name)

        if self.remote is None or not documents:
            return
        try:
            first = await self.remote.get_document(self.spec.name, self._id(documents[0]))
            if first is None:
                await self.remote.set_documents(
                    self.spec.name, {self._id(document): document for document in documents}
                )
                logger.info("Seeded %d %s into the document store", len(documents), self.spec.name)
        except REMOTE_ERRORS as e:
            logger.warning("Error seeding %s into the document store: %s", self.spec.name, e)

    def _lock(self):
        return named_lock(self.spec.cache_key)

    async def _mirror(self, document: Dict[str, Any]) -> None:
        doc_id = self._id(document)
        async with self._lock():
            records = await self.local.read_records(self.spec.cache_key)
            for index, record in enumerate(records):
                if record.get(self.spec.id_field) == doc_id:
                    records[index] = document
                    break
            else:
                records.append(document)
            await self.local.write_records(self.spec.cache_key, records)

    async def _mirror_list(
        self,
        documents: List[Dict[str, Any]],
        filters: Optional[Dict[str, Any]],
    ) -> None:
        async with self._lock():
            if filters:
                records = await self.local.read_records(self.spec.cache_key)
                kept = [record for record in records if not _matches(record, filters)]
                documents = kept + documents
            await self.local.write_records(self.spec.cache_key, documents)
