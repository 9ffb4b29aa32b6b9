"""Ticket schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
from portal.models.ticket import (
    Ticket,
    TicketBranch,
    TicketPriority,
    TicketStatus,
    TicketType,
)

# Assignee filter value selecting tickets with nobody assigned
UNASSIGNED_ASSIGNEE_FILTER_VALUE = "unassigned"


class TicketCreate(DocumentModel):
    """Schema for creating a ticket."""
    title: str = ""
    description: str = ""
    priority: Optional[TicketPriority] = None
    type: Optional[TicketType] = None
    requesting_user_id: str = ""
    requesting_user_email: Optional[str] = None
    provider: Optional[str] = None
    branch: Optional[TicketBranch] = None
    attachment_names: List[str] = Field(default_factory=list)
    assignee_id: Optional[str] = None


class TicketUpdate(DocumentModel):
    """Schema for updating a ticket. Every field is optional."""
    user_id: str = ""
    new_status: Optional[TicketStatus] = None
    new_assignee_id: Optional[str] = None
    new_priority: Optional[TicketPriority] = None
    new_type: Optional[TicketType] = None
    comment: Optional[str] = None

    def has_updates(self) -> bool:
        return any(
            value is not None
            for value in (
                self.new_status,
                self.new_assignee_id,
                self.new_priority,
                self.new_type,
                self.comment,
            )
        )


class CommentCreate(DocumentModel):
    """Schema for commenting on a ticket."""
    user_id: str = ""
    comment: str = ""
    attachment_names: List[str] = Field(default_factory=list)


class AttachmentsAdd(DocumentModel):
    """Schema for attaching files to a ticket."""
    user_id: str
    attachment_names: List[str] = Field(min_length=1)


class TicketFilters(DocumentModel):
    """Filter bar for the admin ticket list and my-tickets."""
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    type: Optional[TicketType] = None
    assignee_id: Optional[str] = None
    provider: Optional[str] = None
    search_term: Optional[str] = None


class TicketActionResult(DocumentModel):
    """Outcome of a ticket action."""
    success: bool
    ticket: Optional[Ticket] = None
    error: Optional[str] = None
