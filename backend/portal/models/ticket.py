"""Ticket documents."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
import enum


class TicketStatus(str, enum.Enum):
    """Ticket status values."""
    ABIERTO = "Abierto"
    PENDIENTE = "Pendiente"
    EN_PROGRESO = "En Progreso"
    RESUELTO = "Resuelto"
    CERRADO = "Cerrado"
    EN_ESPERA_VISTO_BUENO = "En espera del visto bueno"
    REABIERTO = "Reabierto"


class TicketType(str, enum.Enum):
    """Ticket types."""
    NUEVA_FUNCIONALIDAD = "Nueva Funcionalidad"
    BUG = "Bug"
    ISSUE = "Issue"
    TAREA = "Tarea"
    HOTFIX = "Hotfix"


class TicketPriority(str, enum.Enum):
    """Ticket priorities."""
    ALTA = "Alta"
    MEDIA = "Media"
    BAJA = "Baja"


class TicketBranch(str, enum.Enum):
    """Environment/branch a ticket targets."""
    DEV = "DEV"
    QA = "QA"
    PROD = "PROD"


# Terminal states a ticket can be reopened from
CLOSED_STATUSES = (TicketStatus.CERRADO, TicketStatus.RESUELTO)

# Statuses moved to "En Progreso" when a commit is pushed
COMMIT_PROGRESS_STATUSES = (
    TicketStatus.ABIERTO,
    TicketStatus.PENDIENTE,
    TicketStatus.REABIERTO,
)


class TicketHistoryEntry(DocumentModel):
    """Immutable audit record of one change to a ticket."""

    id: str
    timestamp: datetime
    user_id: str
    action: str
    from_status: Optional[TicketStatus] = None
    to_status: Optional[TicketStatus] = None
    from_priority: Optional[TicketPriority] = None
    to_priority: Optional[TicketPriority] = None
    from_type: Optional[TicketType] = None
    to_type: Optional[TicketType] = None
    from_assignee_id: Optional[str] = None
    to_assignee_id: Optional[str] = None
    comment: Optional[str] = None
    commit_sha: Optional[str] = None
    deployment_id: Optional[str] = None
    details: Optional[str] = None
    file_name: Optional[str] = None
    restored_version_id: Optional[str] = None
    attached_file_names: Optional[List[str]] = None
    ticket_id: Optional[str] = None


class Ticket(DocumentModel):
    """Ticket document, keyed by its id (MAS-NNN)."""

    id: str
    title: str
    description: str
    status: TicketStatus
    type: TicketType
    priority: TicketPriority
    requesting_user_id: str
    assignee_id: Optional[str] = None
    last_updated: Optional[datetime] = None
    provider: Optional[str] = None
    branch: Optional[TicketBranch] = None
    github_repository: Optional[str] = None
    attachment_names: List[str] = Field(default_factory=list)
    history: List[TicketHistoryEntry] = Field(default_factory=list)

    def __repr__(self):
        return f"<Ticket(id={self.id}, status={self.status.value})>"

    @property
    def sort_timestamp(self) -> Optional[datetime]:
        """Timestamp used to order ticket lists, newest first."""
        if self.last_updated is not None:
            return self.last_updated
        if self.history:
            return self.history[0].timestamp
        return None

    @property
    def created_at(self) -> Optional[datetime]:
        """Timestamp of the creation entry, or of the first entry."""
        for entry in self.history:
            if entry.action == "Created":
                return entry.timestamp
        return self.history[0].timestamp if self.history else None
