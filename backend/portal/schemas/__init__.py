"""Pydantic schemas for request/response models."""
from portal.schemas.audit import AuditFilters, AuditLogEntry
from portal.schemas.dashboard import DailyCount, DashboardResponse
from portal.schemas.deployment import DeploymentActionResult, DeploymentCreate
from portal.schemas.github import (
    ALL_PROJECTS,
    ActionResult,
    CommitActionResult,
    CommitCreate,
    FileRestoreRequest,
)
from portal.schemas.maximo import MaximoConfiguration
from portal.schemas.ticket import (
    AttachmentsAdd,
    CommentCreate,
    TicketActionResult,
    TicketCreate,
    TicketFilters,
    TicketUpdate,
)
from portal.schemas.user import (
    OrganizationActionResult,
    OrganizationUpsert,
    UserActionResult,
    UserResponse,
    UserUpsert,
)

__all__ = [
    "ALL_PROJECTS",
    "ActionResult",
    "AttachmentsAdd",
    "AuditFilters",
    "AuditLogEntry",
    "CommentCreate",
    "CommitActionResult",
    "CommitCreate",
    "DailyCount",
    "DashboardResponse",
    "DeploymentActionResult",
    "DeploymentCreate",
    "FileRestoreRequest",
    "MaximoConfiguration",
    "OrganizationActionResult",
    "OrganizationUpsert",
    "TicketActionResult",
    "TicketCreate",
    "TicketFilters",
    "TicketUpdate",
    "UserActionResult",
    "UserResponse",
    "UserUpsert",
]
