"""Ticket mutation bookkeeping.

Every change to a ticket's status, assignee, priority or type appends exactly
one history entry carrying the before/after values and the acting user.
Comments append an entry without changing any field. History is append-only.

The status graph is deliberately permissive: any status may move to any other
status. Reopening a closed or resolved ticket only changes the wording of the
generated entry.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from portal.models.base import utc_now
from portal.models.ticket import (
    CLOSED_STATUSES,
    Ticket,
    TicketHistoryEntry,
    TicketPriority,
    TicketStatus,
    TicketType,
)

ACTION_CREATED = "Created"
ACTION_STATUS_CHANGED = "Status Changed"
ACTION_REOPENED = "Ticket Reabierto"
ACTION_ASSIGNEE_CHANGED = "Assignee Changed"
ACTION_PRIORITY_CHANGED = "Priority Changed"
ACTION_TYPE_CHANGED = "Type Changed"
ACTION_COMMENT_ADDED = "Comment Added"
ACTION_COMMIT_ADDED = "Commit Added"
ACTION_DEPLOYMENT_LOGGED = "Deployment Logged"
ACTION_FILE_RESTORED = "File Restored"
ACTION_ATTACHMENTS_ADDED = "Attachments Added"


def new_history_id(kind: str) -> str:
    """Generate a history entry id such as ``hist-status-1a2b3c4d``."""
    return f"hist-{kind}-{uuid.uuid4().hex[:8]}"


def is_reopening(current: TicketStatus, new: TicketStatus) -> bool:
    """Whether a status change reopens a closed or resolved ticket."""
    return current in CLOSED_STATUSES and new == TicketStatus.REABIERTO


def creation_entry(
    ticket_id: str,
    requesting_user_id: str,
    ticket_type: TicketType,
    timestamp: datetime,
) -> TicketHistoryEntry:
    """First entry of every ticket."""
    return TicketHistoryEntry(
        id=new_history_id("init"),
        timestamp=timestamp,
        user_id=requesting_user_id,
        action=ACTION_CREATED,
        to_status=TicketStatus.ABIERTO,
        to_type=ticket_type,
        details="Ticket Creado",
        ticket_id=ticket_id,
    )


def compute_update_entries(
    ticket: Ticket,
    acting_user_id: str,
    *,
    new_status: Optional[TicketStatus] = None,
    new_assignee_id: Optional[str] = None,
    new_priority: Optional[TicketPriority] = None,
    new_type: Optional[TicketType] = None,
    comment: Optional[str] = None,
    commit_sha: Optional[str] = None,
    deployment_id: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> Tuple[Dict[str, Any], List[TicketHistoryEntry]]:
    """Work out which fields actually change and the entries describing them.

    Returns the changed fields (keyed by attribute name) and the new entries,
    in the order status, assignee, priority, type, comment. An empty-string
    assignee means "unassign".
    """
    timestamp = timestamp or utc_now()
    changes: Dict[str, Any] = {}
    entries: List[TicketHistoryEntry] = []
    reopened = False

    if new_status is not None and new_status != ticket.status:
        changes["status"] = new_status
        reopened = is_reopening(ticket.status, new_status)
        if reopened:
            action = ACTION_REOPENED
            details = f"Ticket Reabierto por {acting_user_id}"
        else:
            action = ACTION_STATUS_CHANGED
            details = f"Estado cambiado de {ticket.status.value} a {new_status.value}"
        entries.append(TicketHistoryEntry(
            id=new_history_id("status"),
            timestamp=timestamp,
            user_id=acting_user_id,
            action=action,
            from_status=ticket.status,
            to_status=new_status,
            comment=comment if reopened else None,
            details=details,
            ticket_id=ticket.id,
        ))

    if new_assignee_id is not None:
        assignee_id = new_assignee_id or None
        if assignee_id != ticket.assignee_id:
            changes["assignee_id"] = assignee_id
            entries.append(TicketHistoryEntry(
                id=new_history_id("assignee"),
                timestamp=timestamp,
                user_id=acting_user_id,
                action=ACTION_ASSIGNEE_CHANGED,
                from_assignee_id=ticket.assignee_id,
                to_assignee_id=assignee_id,
                details=f"Asignado a {assignee_id}" if assignee_id else "Ticket desasignado",
                ticket_id=ticket.id,
            ))

    if new_priority is not None and new_priority != ticket.priority:
        changes["priority"] = new_priority
        entries.append(TicketHistoryEntry(
            id=new_history_id("priority"),
            timestamp=timestamp,
            user_id=acting_user_id,
            action=ACTION_PRIORITY_CHANGED,
            from_priority=ticket.priority,
            to_priority=new_priority,
            details=f"Prioridad cambiada de {ticket.priority.value} a {new_priority.value}",
            ticket_id=ticket.id,
        ))

    if new_type is not None and new_type != ticket.type:
        changes["type"] = new_type
        entries.append(TicketHistoryEntry(
            id=new_history_id("type"),
            timestamp=timestamp,
            user_id=acting_user_id,
            action=ACTION_TYPE_CHANGED,
            from_type=ticket.type,
            to_type=new_type,
            details=f"Tipo cambiado de {ticket.type.value} a {new_type.value}",
            ticket_id=ticket.id,
        ))

    # A reopening entry already carries the comment
    if comment and not reopened:
        if commit_sha:
            kind, action = "commit", ACTION_COMMIT_ADDED
            details = f"Commit {commit_sha[:7]} registrado por {acting_user_id}"
        elif deployment_id:
            kind, action = "deploy", ACTION_DEPLOYMENT_LOGGED
            details = f"Despliegue {deployment_id} registrado por {acting_user_id}"
        else:
            kind, action = "comment", ACTION_COMMENT_ADDED
            details = f"Comentario agregado por {acting_user_id}"
        entries.append(TicketHistoryEntry(
            id=new_history_id(kind),
            timestamp=timestamp,
            user_id=acting_user_id,
            action=action,
            comment=comment,
            commit_sha=commit_sha,
            deployment_id=deployment_id,
            details=details,
            ticket_id=ticket.id,
        ))

    return changes, entries


def append_history(
    ticket: Ticket,
    entries: List[TicketHistoryEntry],
    timestamp: datetime,
    **changes: Any,
) -> Ticket:
    """Return a copy of the ticket with the changes applied and entries appended."""
    update = dict(changes)
    update["history"] = list(ticket.history) + list(entries)
    update["last_updated"] = timestamp
    return ticket.model_copy(update=update)


def apply_ticket_update(ticket: Ticket, acting_user_id: str, **updates: Any) -> Tuple[Ticket, List[TicketHistoryEntry]]:
    """Apply optional field updates and/or a comment to a ticket.

    When nothing changes the ticket is returned untouched, with no new entry
    and the same ``last_updated``.
    """
    timestamp = updates.pop("timestamp", None) or utc_now()
    changes, entries = compute_update_entries(ticket, acting_user_id, timestamp=timestamp, **updates)
    if not entries:
        return ticket, []
    return append_history(ticket, entries, timestamp, **changes), entries
