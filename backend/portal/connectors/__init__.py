"""Remote store connectors."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DocumentStoreError(Exception):
    """Raised when the remote document store cannot serve a request."""


class BaseDocumentStore(ABC):
    """Base class for hosted document stores.

    Documents are JSON objects grouped in collections, one document per
    record, keyed by the record id.
    """

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str, float]:
        """
        Test connection to the document store.
        Returns: (success, message, latency_ms)
        """
        pass

    @abstractmethod
    async def list_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """List documents of a collection, optionally filtered by field equality."""
        pass

    @abstractmethod
    async def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get one document, or None if it does not exist."""
        pass

    @abstractmethod
    async def set_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Create or replace one document."""
        pass

    @abstractmethod
    async def set_documents(self, collection: str, documents: Dict[str, Dict[str, Any]]) -> None:
        """Create or replace several documents in one batch."""
        pass
