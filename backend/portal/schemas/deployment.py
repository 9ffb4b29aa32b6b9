"""Deployment schemas."""
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
from portal.models.deployment import (
    DeployedFile,
    DeploymentEnvironment,
    DeploymentLogEntry,
    DeploymentStatus,
)


class DeploymentCreate(DocumentModel):
    """Schema for logging a deployment."""
    user_id: str = ""
    files_deployed: List[DeployedFile] = Field(default_factory=list)
    environment: Optional[DeploymentEnvironment] = None
    status: Optional[DeploymentStatus] = None
    result_code: Optional[str] = None
    message: Optional[str] = None
    ticket_ids: List[str] = Field(default_factory=list)


class DeploymentActionResult(DocumentModel):
    """Outcome of a deployment action."""
    success: bool
    log: Optional[DeploymentLogEntry] = None
    error: Optional[str] = None
