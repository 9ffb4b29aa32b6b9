"""Commit and file version documents."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel


class GitHubCommit(DocumentModel):
    """A commit pushed to one of the Maximo repositories."""

    sha: str
    message: str
    author: str
    url: str
    date: datetime
    files_changed: List[str] = Field(default_factory=list)


class FileVersion(DocumentModel):
    """A version of a file, derived from the commits touching it."""

    id: str
    timestamp: datetime
    commit_sha: str
    author: str
    message: Optional[str] = None
    file_name: str
