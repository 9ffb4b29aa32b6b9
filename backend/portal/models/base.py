"""Base class for documents stored in the remote store and the local cache."""
from datetime import datetime, timezone
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """Pydantic model serialized with camelCase keys.

    The same shape is written to the remote document store, the local cache
    and returned by the API.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, data: Dict[str, Any]):
        """Build a model from a stored document."""
        return cls.model_validate(data)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. from query strings) as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
