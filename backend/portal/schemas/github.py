"""Commit and file version schemas."""
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
from portal.models.commit import GitHubCommit

# Ticket id selecting the commits of every project
ALL_PROJECTS = "ALL_PROJECTS"


class CommitCreate(DocumentModel):
    """Schema for committing and pushing changes for a ticket."""
    ticket_id: str = ""
    message: str = ""
    author: str = ""
    file_names: List[str] = Field(default_factory=list)
    branch: str = "dev"


class CommitActionResult(DocumentModel):
    """Outcome of a commit action."""
    success: bool
    commit: Optional[GitHubCommit] = None
    error: Optional[str] = None


class FileRestoreRequest(DocumentModel):
    """Schema for restoring a file to a previous version."""
    user_id: str = ""
    file_name: str = ""
    version_id: str = ""
    commit_sha: Optional[str] = None
    ticket_id: Optional[str] = None


class ActionResult(DocumentModel):
    """Outcome of an action with no record to return."""
    success: bool
    error: Optional[str] = None
