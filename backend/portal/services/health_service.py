"""Reachability of the external services the portal talks to."""
import logging
from typing import Any, Dict, Optional
from portal.connectors import BaseDocumentStore
from portal.connectors.maximo import MaximoClient

logger = logging.getLogger(__name__)


async def _check(name: str, connector) -> Dict[str, Any]:
    if connector is None:
        return {"status": "not_configured"}
    ok, message, latency = await connector.test_connection()
    if not ok:
        logger.warning("%s unreachable: %s", name, message)
    return {"status": "ok" if ok else "fail", "message": message, "latencyMs": round(latency, 1)}


async def check_connectors(
    document_store: Optional[BaseDocumentStore],
    maximo_client: Optional[MaximoClient],
) -> Dict[str, Any]:
    """
    Check the document store and the Maximo API.

    The portal stays ready when either is down: collections fall back to the
    local cache and uploads fail individually. The status is "degraded" then.
    """
    checks = {
        "documentStore": await _check("Document store", document_store),
        "maximo": await _check("Maximo API", maximo_client),
    }
    degraded = any(check["status"] == "fail" for check in checks.values())
    return {"status": "degraded" if degraded else "ready", "checks": checks}
