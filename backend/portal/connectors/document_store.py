"""HTTP connector for the hosted document store."""
import time
from functools import lru_cache
from typing import Any, Dict, List, Optional
import httpx
from portal.config import get_settings
from portal.connectors import BaseDocumentStore, DocumentStoreError


class HttpDocumentStore(BaseDocumentStore):
    """Connector for a REST document store.

    Layout: ``{base_url}/{collection}`` lists documents (equality filters as
    query parameters), ``{base_url}/{collection}/{id}`` reads and writes one
    document, ``{base_url}/{collection}:batchWrite`` writes several.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise DocumentStoreError(f"Document store timeout on {method} {path}") from e
        except httpx.HTTPError as e:
            raise DocumentStoreError(f"Document store error on {method} {path}: {e}") from e

    @staticmethod
    def _check(response: httpx.Response) -> None:
        if response.status_code >= 400:
            raise DocumentStoreError(
                f"Document store returned HTTP {response.status_code} for {response.request.url}"
            )

    async def test_connection(self) -> tuple[bool, str, float]:
        """Test connection to the document store."""
        start_time = time.time()
        try:
            response = await self._request("GET", "/")
            latency = (time.time() - start_time) * 1000
            if response.status_code < 400:
                return True, "Connected. Document store is reachable.", latency
            return False, f"Connection failed: HTTP {response.status_code}", latency
        except DocumentStoreError as e:
            latency = (time.time() - start_time) * 1000
            return False, f"Connection error: {str(e)}", latency

    async def list_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        response = await self._request("GET", f"/{collection}", params=filters or None)
        self._check(response)
        return response.json().get("documents", [])

    async def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        response = await self._request("GET", f"/{collection}/{doc_id}")
        if response.status_code == 404:
            return None
        self._check(response)
        return response.json()

    async def set_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        response = await self._request("PUT", f"/{collection}/{doc_id}", json=data)
        self._check(response)

    async def set_documents(self, collection: str, documents: Dict[str, Dict[str, Any]]) -> None:
        writes = [{"id": doc_id, "data": data} for doc_id, data in documents.items()]
        response = await self._request("POST", f"/{collection}:batchWrite", json={"writes": writes})
        self._check(response)


@lru_cache()
def get_document_store() -> Optional[BaseDocumentStore]:
    """Get the configured document store, or None when it is not configured."""
    settings = get_settings()
    if not settings.document_store_url:
        return None
    return HttpDocumentStore(
        base_url=settings.document_store_url,
        auth_token=settings.document_store_token or None,
        timeout=settings.document_store_timeout,
    )
