"""Audit log service: ticket history and deployments in one timeline."""
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.history import (
    ACTION_COMMIT_ADDED,
    ACTION_CREATED,
    ACTION_FILE_RESTORED,
    ACTION_STATUS_CHANGED,
)
from portal.models.base import ensure_aware
from portal.models.deployment import DeploymentLogEntry
from portal.models.ticket import TicketHistoryEntry
from portal.schemas.audit import AuditFilters, AuditLogEntry
from portal.services import deployment_service, ticket_service

# Ticket action label each action type filter matches (case-insensitive substring)
ACTION_TYPE_LABELS = {
    "ticket_status_change": ACTION_STATUS_CHANGED,
    "ticket_commit": ACTION_COMMIT_ADDED,
    "ticket_created": ACTION_CREATED,
    "file_restored": ACTION_FILE_RESTORED,
}


def from_history_entry(entry: TicketHistoryEntry) -> AuditLogEntry:
    return AuditLogEntry(
        id=entry.id,
        timestamp=entry.timestamp,
        user_id=entry.user_id,
        action=entry.action,
        entry_type="ticket",
        details=entry.details,
        ticket_id=entry.ticket_id,
        comment=entry.comment,
        commit_sha=entry.commit_sha,
        deployment_id=entry.deployment_id,
    )


def from_deployment(log: DeploymentLogEntry) -> AuditLogEntry:
    count = len(log.files_deployed)
    details = f"Deployed {count} file(s) to {log.environment.value}."
    if log.message:
        details += f" {log.message}"
    return AuditLogEntry(
        id=log.id,
        timestamp=log.timestamp,
        user_id=log.user_id,
        action=f"Deployment: {log.status.value}",
        entry_type="deployment",
        details=details,
        ticket_id=", ".join(log.ticket_ids) if log.ticket_ids else None,
        deployment_id=log.id,
        environment=log.environment,
        files_deployed_count=count,
        deployment_status=log.status,
    )


def _matches(entry: AuditLogEntry, filters: AuditFilters) -> bool:
    if filters.date_from and entry.timestamp < ensure_aware(filters.date_from):
        return False
    if filters.date_to and entry.timestamp > ensure_aware(filters.date_to):
        return False
    if filters.user_id and entry.user_id != filters.user_id:
        return False

    if filters.action_type == "deployment":
        if entry.entry_type != "deployment":
            return False
    elif filters.action_type:
        label = ACTION_TYPE_LABELS[filters.action_type].lower()
        if entry.entry_type != "ticket" or label not in entry.action.lower():
            return False

    if filters.search_term:
        searchable = " ".join(
            str(value) for value in (
                entry.user_id,
                entry.action,
                entry.details,
                entry.ticket_id,
                entry.commit_sha,
                entry.deployment_id,
                entry.comment,
                entry.environment.value if entry.environment else None,
                entry.deployment_status.value if entry.deployment_status else None,
            )
            if value
        ).lower()
        if filters.search_term.lower() not in searchable:
            return False
    return True


async def get_audit_log(
    db: AsyncSession,
    filters: Optional[AuditFilters] = None,
) -> List[AuditLogEntry]:
    """Combined, filtered audit log, newest first."""
    filters = filters or AuditFilters()
    histories = await ticket_service.get_all_ticket_histories(db)
    deployments = await deployment_service.get_deployment_logs(db)

    entries = [from_history_entry(entry) for entry in histories]
    entries += [from_deployment(log) for log in deployments]
    entries = [entry for entry in entries if _matches(entry, filters)]
    return sorted(entries, key=lambda entry: entry.timestamp, reverse=True)
