"""Local cache entry model."""
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from portal.database import Base


class CacheEntry(Base):
    """One key of the local cache, holding a JSON document as text."""

    __tablename__ = "local_cache"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<CacheEntry(key={self.key})>"
