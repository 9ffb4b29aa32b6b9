"""Document models and the local cache table."""
from portal.models.cache_entry import CacheEntry
from portal.models.commit import FileVersion, GitHubCommit
from portal.models.deployment import DeployedFile, DeploymentLogEntry
from portal.models.ticket import Ticket, TicketHistoryEntry
from portal.models.user import Organization, User

__all__ = [
    "CacheEntry",
    "DeployedFile",
    "DeploymentLogEntry",
    "FileVersion",
    "GitHubCommit",
    "Organization",
    "Ticket",
    "TicketHistoryEntry",
    "User",
]
