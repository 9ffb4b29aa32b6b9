"""Audit log schemas."""
from datetime import datetime
from typing import Literal, Optional
from portal.models.base import DocumentModel
from portal.models.deployment import DeploymentEnvironment, DeploymentStatus

AuditActionType = Literal[
    "deployment",
    "ticket_status_change",
    "ticket_commit",
    "ticket_created",
    "file_restored",
]


class AuditFilters(DocumentModel):
    """Filters of the combined audit log."""
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    user_id: Optional[str] = None
    action_type: Optional[AuditActionType] = None
    search_term: Optional[str] = None


class AuditLogEntry(DocumentModel):
    """A ticket history entry or a deployment, in one shape."""
    id: str
    timestamp: datetime
    user_id: str
    action: str
    entry_type: Literal["ticket", "deployment"]
    details: Optional[str] = None
    ticket_id: Optional[str] = None
    comment: Optional[str] = None
    commit_sha: Optional[str] = None
    deployment_id: Optional[str] = None
    environment: Optional[DeploymentEnvironment] = None
    files_deployed_count: Optional[int] = None
    deployment_status: Optional[DeploymentStatus] = None
