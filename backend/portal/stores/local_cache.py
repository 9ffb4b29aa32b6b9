"""Key/value local cache backed by the ``local_cache`` table."""
import json
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from portal.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)


class LocalCache:
    """String-keyed cache holding JSON text, one row per key."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_item(self, key: str) -> Optional[str]:
        # Column select so another session's committed write is always seen
        result = await self.db.execute(select(CacheEntry.value).where(CacheEntry.key == key))
        return result.scalar_one_or_none()

    async def set_item(self, key: str, value: str) -> None:
        result = await self.db.execute(select(CacheEntry).where(CacheEntry.key == key))
        entry = result.scalar_one_or_none()
        if entry is None:
            self.db.add(CacheEntry(key=key, value=value))
        else:
            entry.value = value
        await self.db.commit()

    async def read_records(self, key: str) -> List[Dict[str, Any]]:
        """Read the JSON array stored under key; unreadable data reads as empty."""
        raw = await self.get_item(key)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except ValueError:
            logger.error("Local cache key %s holds invalid JSON, ignoring it", key)
            return []
        if not isinstance(records, list):
            logger.error("Local cache key %s does not hold an array, ignoring it", key)
            return []
        return records

    async def write_records(self, key: str, records: List[Dict[str, Any]]) -> None:
        await self.set_item(key, json.dumps(records))
