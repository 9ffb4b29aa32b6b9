"""Dashboard schemas."""
from typing import List, Optional
from pydantic import Field
from portal.models.base import DocumentModel
from portal.models.commit import GitHubCommit
from portal.models.ticket import Ticket
from portal.schemas.user import UserResponse


class DailyCount(DocumentModel):
    """Number of tickets created on one day."""
    date: str
    count: int


class DashboardResponse(DocumentModel):
    """Dashboard data for one user.

    Admins and superusers get the global counters, clients get their own.
    """
    tickets: List[Ticket] = Field(default_factory=list)
    github_commits: List[GitHubCommit] = Field(default_factory=list)
    users: List[UserResponse] = Field(default_factory=list)
    total_tickets_count: Optional[int] = None
    closed_tickets_count: Optional[int] = None
    pending_tickets_count: Optional[int] = None
    commits_last_week_count: Optional[int] = None
    my_active_tickets_count: Optional[int] = None
    my_total_tickets_count: Optional[int] = None
    my_closed_tickets_count: Optional[int] = None
    my_tickets_over_time: Optional[List[DailyCount]] = None
