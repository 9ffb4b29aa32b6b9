"""HTTP connector for the Maximo REST API."""
import time
from typing import Any, Dict
import httpx


class MaximoClient:
    """Uploads configurations (automation scripts, XML, reports) to Maximo."""

    def __init__(
        self,
        base_url: str,
        api_key: str = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def test_connection(self) -> tuple[bool, str, float]:
        """Test connection to Maximo."""
        start_time = time.time()
        try:
            async with self._client() as client:
                response = await client.get("/whoami")
            latency = (time.time() - start_time) * 1000
            if response.status_code == 200:
                return True, "Connected. Maximo API is reachable.", latency
            return False, f"Connection failed: HTTP {response.status_code}", latency
        except httpx.TimeoutException:
            latency = (time.time() - start_time) * 1000
            return False, "Connection timeout", latency
        except httpx.HTTPError as e:
            latency = (time.time() - start_time) * 1000
            return False, f"Connection error: {str(e)}", latency

    async def upload_configuration(self, payload: Dict[str, Any]) -> bool:
        """
        POST a configuration to ``/configurations``.

        Returns whether Maximo accepted it. Transport errors propagate as
        ``httpx.HTTPError``.
        """
        async with self._client() as client:
            response = await client.post("/configurations", json=payload)
        return response.status_code < 400
