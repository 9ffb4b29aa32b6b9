"""Ticket service."""
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.history import (
    ACTION_ATTACHMENTS_ADDED,
    ACTION_COMMENT_ADDED,
    ACTION_FILE_RESTORED,
    append_history,
    apply_ticket_update,
    creation_entry,
    new_history_id,
)
from portal.core.locks import named_lock
from portal.models.base import ensure_aware, utc_now
from portal.models.ticket import (
    COMMIT_PROGRESS_STATUSES,
    Ticket,
    TicketHistoryEntry,
    TicketPriority,
    TicketStatus,
    TicketType,
)
from portal.schemas.ticket import (
    UNASSIGNED_ASSIGNEE_FILTER_VALUE,
    TicketCreate,
    TicketFilters,
    TicketUpdate,
)
from portal.services import user_service
from portal.stores import TICKETS, get_collection

logger = logging.getLogger(__name__)

TICKET_ID_PREFIX = "MAS-"
_TICKET_ID_PATTERN = re.compile(r"^MAS-(\d+)$")
_CREATE_LOCK = "tickets:create"

# Oldest possible timestamp, used to sort tickets without any date last
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _merge_names(current: Iterable[str], added: Iterable[str]) -> List[str]:
    """Union of two name lists keeping first-seen order."""
    merged: List[str] = []
    for name in list(current) + list(added):
        if name not in merged:
            merged.append(name)
    return merged


def _sort_newest_first(tickets: List[Ticket]) -> List[Ticket]:
    return sorted(tickets, key=lambda ticket: ticket.sort_timestamp or _EPOCH, reverse=True)


async def _save(db: AsyncSession, ticket: Ticket) -> Ticket:
    await get_collection(db, TICKETS).put(ticket.to_document())
    return ticket


async def get_tickets(
    db: AsyncSession,
    requesting_user_id: Optional[str] = None,
) -> List[Ticket]:
    """Get all tickets, or those requested by one user, newest first."""
    filters = {"requestingUserId": requesting_user_id} if requesting_user_id else None
    documents = await get_collection(db, TICKETS).list(filters)
    return _sort_newest_first([Ticket.from_document(document) for document in documents])


async def get_ticket_by_id(db: AsyncSession, ticket_id: str) -> Optional[Ticket]:
    """Get a ticket by its id."""
    document = await get_collection(db, TICKETS).get(ticket_id)
    return Ticket.from_document(document) if document else None


async def generate_ticket_id(db: AsyncSession) -> str:
    """
    Generate the next ticket id.
    Format: MAS-{sequence, at least 3 digits}
    Example: MAS-004
    """
    highest = 0
    for document in await get_collection(db, TICKETS).list():
        match = _TICKET_ID_PATTERN.match(str(document.get("id", "")))
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{TICKET_ID_PREFIX}{highest + 1:03d}"


def derive_github_repository(provider: str) -> str:
    """Repository name used for a provider without a configured repository."""
    slug = re.sub(r"[^a-z0-9-]", "", provider.lower())
    return f"maximo-{slug}"


async def create_ticket(db: AsyncSession, data: TicketCreate) -> Ticket:
    """Create a new ticket, opened with a single "Created" entry."""
    ticket_type = data.type or TicketType.TAREA

    github_repository = None
    if data.provider:
        organization = await user_service.get_organization_by_name(db, data.provider)
        if organization and organization.github_repository:
            github_repository = organization.github_repository
        else:
            github_repository = derive_github_repository(data.provider)

    # Id allocation and the first write are one step for concurrent creates
    async with named_lock(_CREATE_LOCK):
        ticket_id = await generate_ticket_id(db)
        ticket = _new_ticket(ticket_id, data, ticket_type, github_repository)
        await _save(db, ticket)
    logger.info("Ticket %s created by %s", ticket_id, data.requesting_user_id)
    return ticket


def _new_ticket(
    ticket_id: str,
    data: TicketCreate,
    ticket_type: TicketType,
    github_repository: Optional[str],
) -> Ticket:
    timestamp = utc_now()
    return Ticket(
        id=ticket_id,
        title=data.title,
        description=data.description,
        status=TicketStatus.ABIERTO,
        type=ticket_type,
        priority=data.priority or TicketPriority.MEDIA,
        requesting_user_id=data.requesting_user_id,
        assignee_id=data.assignee_id or None,
        last_updated=timestamp,
        provider=data.provider,
        branch=data.branch,
        github_repository=github_repository,
        attachment_names=_merge_names([], data.attachment_names),
        history=[creation_entry(ticket_id, data.requesting_user_id, ticket_type, timestamp)],
    )


async def update_ticket(
    db: AsyncSession,
    ticket_id: str,
    data: TicketUpdate,
    commit_sha: Optional[str] = None,
    deployment_id: Optional[str] = None,
) -> Optional[Ticket]:
    """
    Update a ticket's status, assignee, priority or type, and/or comment on it.

    Returns None when the ticket does not exist. When nothing effectively
    changes the stored ticket is returned without being written.
    """
    ticket = await get_ticket_by_id(db, ticket_id)
    if not ticket:
        logger.error("Ticket %s not found for update", ticket_id)
        return None

    updated, entries = apply_ticket_update(
        ticket,
        data.user_id,
        new_status=data.new_status,
        new_assignee_id=data.new_assignee_id,
        new_priority=data.new_priority,
        new_type=data.new_type,
        comment=data.comment,
        commit_sha=commit_sha,
        deployment_id=deployment_id,
    )
    if not entries:
        logger.info("No effective changes for ticket %s", ticket_id)
        return ticket
    return await _save(db, updated)


async def add_comment_to_ticket(
    db: AsyncSession,
    ticket_id: str,
    user_id: str,
    comment: str,
    attachment_names: Optional[List[str]] = None,
) -> Optional[Ticket]:
    """Append a comment, merging its attachments into the ticket."""
    ticket = await get_ticket_by_id(db, ticket_id)
    if not ticket:
        logger.error("Ticket %s not found for comment", ticket_id)
        return None

    attachment_names = attachment_names or []
    details = f"Comentario agregado por {user_id}"
    if attachment_names:
        details += f". Archivos adjuntos: {', '.join(attachment_names)}"

    timestamp = utc_now()
    entry = TicketHistoryEntry(
        id=new_history_id("comment"),
        timestamp=timestamp,
        user_id=user_id,
        action=ACTION_COMMENT_ADDED,
        comment=comment,
        attached_file_names=attachment_names or None,
        details=details,
        ticket_id=ticket_id,
    )
    updated = append_history(
        ticket,
        [entry],
        timestamp,
        attachment_names=_merge_names(ticket.attachment_names, attachment_names),
    )
    return await _save(db, updated)


async def add_attachments_to_ticket(
    db: AsyncSession,
    ticket_id: str,
    user_id: str,
    attachment_names: List[str],
) -> Optional[Ticket]:
    """Attach files to a ticket."""
    ticket = await get_ticket_by_id(db, ticket_id)
    if not ticket:
        return None

    timestamp = utc_now()
    entry = TicketHistoryEntry(
        id=new_history_id("attach"),
        timestamp=timestamp,
        user_id=user_id,
        action=ACTION_ATTACHMENTS_ADDED,
        attached_file_names=list(attachment_names),
        details=f"Archivos adjuntados: {', '.join(attachment_names)} por {user_id}",
        ticket_id=ticket_id,
    )
    updated = append_history(
        ticket,
        [entry],
        timestamp,
        attachment_names=_merge_names(ticket.attachment_names, attachment_names),
    )
    return await _save(db, updated)


async def add_commit_to_ticket_history(
    db: AsyncSession,
    ticket_id: str,
    commit_sha: str,
    user_id: str,
    commit_message: str,
    branch: str,
) -> Optional[Ticket]:
    """Record a commit on a ticket, moving open work to "En Progreso"."""
    ticket = await get_ticket_by_id(db, ticket_id)
    new_status = None
    if ticket and ticket.status in COMMIT_PROGRESS_STATUSES:
        new_status = TicketStatus.EN_PROGRESO

    comment = f"Commit {commit_sha[:7]} a rama '{branch}': {commit_message}"
    return await update_ticket(
        db,
        ticket_id,
        TicketUpdate(user_id=user_id, new_status=new_status, comment=comment),
        commit_sha=commit_sha,
    )


async def add_deployment_to_ticket_history(
    db: AsyncSession,
    ticket_id: str,
    deployment_id: str,
    user_id: str,
    environment: str,
    result: str,
) -> Optional[Ticket]:
    """Record a deployment on a ticket."""
    comment = f"Despliegue {deployment_id} a {environment} registrado. Resultado: {result}."
    return await update_ticket(
        db,
        ticket_id,
        TicketUpdate(user_id=user_id, comment=comment),
        deployment_id=deployment_id,
    )


async def add_restoration_to_ticket_history(
    db: AsyncSession,
    ticket_id: str,
    user_id: str,
    file_name: str,
    restored_version_id: str,
    commit_sha: Optional[str] = None,
) -> Optional[Ticket]:
    """Record that a file was restored to an earlier version."""
    ticket = await get_ticket_by_id(db, ticket_id)
    if not ticket:
        logger.error("Ticket %s not found for file restoration", ticket_id)
        return None

    details = f"Archivo '{file_name}' restaurado a la versión '{restored_version_id}'"
    if commit_sha:
        details += f" (commit {commit_sha[:7]})"
    details += "."

    timestamp = utc_now()
    entry = TicketHistoryEntry(
        id=new_history_id("restore"),
        timestamp=timestamp,
        user_id=user_id,
        action=ACTION_FILE_RESTORED,
        file_name=file_name,
        restored_version_id=restored_version_id,
        commit_sha=commit_sha,
        details=details,
        ticket_id=ticket_id,
    )
    return await _save(db, append_history(ticket, [entry], timestamp))


async def get_all_ticket_histories(db: AsyncSession) -> List[TicketHistoryEntry]:
    """Every history entry of every ticket, newest first."""
    entries = []
    for ticket in await get_tickets(db):
        for entry in ticket.history:
            entries.append(entry.model_copy(update={"ticket_id": ticket.id}))
    return sorted(entries, key=lambda entry: entry.timestamp, reverse=True)


def filter_tickets(tickets: List[Ticket], filters: TicketFilters) -> List[Ticket]:
    """Apply the ticket list filter bar."""
    date_from = ensure_aware(filters.date_from) if filters.date_from else None
    date_to = ensure_aware(filters.date_to) if filters.date_to else None
    term = filters.search_term.lower() if filters.search_term else None

    result = []
    for ticket in tickets:
        ticket_date = ticket.sort_timestamp or _EPOCH
        if date_from and ticket_date < date_from:
            continue
        if date_to and ticket_date > date_to:
            continue
        if filters.status and ticket.status != filters.status:
            continue
        if filters.priority and ticket.priority != filters.priority:
            continue
        if filters.type and ticket.type != filters.type:
            continue
        if filters.assignee_id:
            if filters.assignee_id == UNASSIGNED_ASSIGNEE_FILTER_VALUE:
                if ticket.assignee_id:
                    continue
            elif ticket.assignee_id != filters.assignee_id:
                continue
        if filters.provider and ticket.provider != filters.provider:
            continue
        if term:
            searchable = " ".join([
                ticket.id,
                ticket.title,
                ticket.description,
                ticket.type.value,
                ticket.assignee_id or "",
                ticket.requesting_user_id,
                ticket.provider or "",
                ticket.branch.value if ticket.branch else "",
            ]).lower()
            if term not in searchable:
                continue
        result.append(ticket)
    return result
