"""Deployment log documents."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
import enum


class DeploymentEnvironment(str, enum.Enum):
    """Target environments."""
    DEV = "DEV"
    QA = "QA"
    PROD = "PROD"
    STAGING = "Staging"
    OTHER = "Other"


class DeploymentStatus(str, enum.Enum):
    """Deployment outcome."""
    SUCCESS = "Success"
    FAILURE = "Failure"
    IN_PROGRESS = "In Progress"
    PENDING = "Pending"


class DeployedFileType(str, enum.Enum):
    """Kind of file pushed to Maximo."""
    SCRIPT = "script"
    XML = "xml"
    REPORT = "report"
    OTHER = "other"


class DeployedFile(DocumentModel):
    """A file included in a deployment."""

    name: str
    version: Optional[str] = None
    type: DeployedFileType = DeployedFileType.OTHER


class DeploymentLogEntry(DocumentModel):
    """Record of files pushed to an environment, optionally linked to tickets."""

    id: str
    timestamp: datetime
    user_id: str
    files_deployed: List[DeployedFile]
    environment: DeploymentEnvironment
    status: DeploymentStatus
    result_code: Optional[str] = None
    message: Optional[str] = None
    ticket_ids: List[str] = Field(default_factory=list)

    def __repr__(self):
        return f"<DeploymentLogEntry(id={self.id}, environment={self.environment.value})>"
