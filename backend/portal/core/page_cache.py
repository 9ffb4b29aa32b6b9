"""Per-URL cache of read endpoints, invalidated by path after writes."""
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple
from portal.config import get_settings

logger = logging.getLogger(__name__)

# Cached read paths
DASHBOARD_PATH = "/api/dashboard"
TICKETS_PATH = "/api/tickets"
DEPLOYMENTS_PATH = "/api/deployments"
AUDIT_LOG_PATH = "/api/audit-log"
COMMITS_PATH = "/api/github/commits"
USERS_PATH = "/api/users"
ORGANIZATIONS_PATH = "/api/organizations"


def ticket_path(ticket_id: str) -> str:
    return f"{TICKETS_PATH}/{ticket_id}"


class PageCache:
    """Maps ``path?query`` keys to loaded page data."""

    def __init__(self):
        self._entries: Dict[Tuple[str, str], Tuple[float, Any]] = {}

    def get(self, path: str, query: str = "") -> Optional[Any]:
        settings = get_settings()
        if not settings.page_cache_enabled:
            return None
        item = self._entries.get((path, query))
        if item is None:
            return None
        stored_at, value = item
        if time.monotonic() - stored_at > settings.page_cache_ttl_seconds:
            del self._entries[(path, query)]
            return None
        return value

    def set(self, path: str, query: str, value: Any) -> None:
        if get_settings().page_cache_enabled:
            self._entries[(path, query)] = (time.monotonic(), value)

    async def get_or_load(self, path: str, query: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        cached = self.get(path, query)
        if cached is not None:
            return cached
        value = await loader()
        self.set(path, query, value)
        return value

    def revalidate(self, path: str) -> int:
        """Drop every cached variant of path. Returns how many entries went."""
        keys = [key for key in self._entries if key[0] == path]
        for key in keys:
            del self._entries[key]
        logger.debug("Revalidated %s (%d cached entries)", path, len(keys))
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()


page_cache = PageCache()


def revalidate_path(path: str) -> int:
    """Invalidate the cached pages showing path."""
    return page_cache.revalidate(path)
