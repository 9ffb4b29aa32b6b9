"""Maximo configuration schemas."""
from portal.models.base import DocumentModel


class MaximoConfiguration(DocumentModel):
    """A configuration (automation script, XML, report) to upload to Maximo."""
    name: str
    type: str
    content: str
