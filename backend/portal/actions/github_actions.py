"""Commit actions."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import (
    AUDIT_LOG_PATH,
    COMMITS_PATH,
    DASHBOARD_PATH,
    TICKETS_PATH,
    revalidate_path,
    ticket_path,
)
from portal.schemas.github import CommitActionResult, CommitCreate
from portal.services import github_service, notification_service, ticket_service, user_service

logger = logging.getLogger(__name__)


async def create_commit_and_push_action(db: AsyncSession, data: CommitCreate) -> CommitActionResult:
    """Commit files for a ticket and record the commit in its history."""
    if not data.ticket_id or not data.message or not data.author:
        return CommitActionResult(success=False, error="Ticket ID, commit message, and author are required.")

    try:
        ticket = await ticket_service.get_ticket_by_id(db, data.ticket_id)
        commit = await github_service.create_commit(
            db,
            data.ticket_id,
            data.message,
            data.author,
            data.file_names,
            data.branch,
            repository=ticket.github_repository if ticket else None,
        )

        updated = await ticket_service.add_commit_to_ticket_history(
            db, data.ticket_id, commit.sha, data.author, data.message, data.branch
        )
        if not updated:
            logger.warning(
                "Commit %s created, but failed to add it to ticket %s history",
                commit.sha, data.ticket_id,
            )

        revalidate_path(ticket_path(data.ticket_id))
        revalidate_path(TICKETS_PATH)
        revalidate_path(DASHBOARD_PATH)
        revalidate_path(COMMITS_PATH)
        revalidate_path(AUDIT_LOG_PATH)

        committer = await user_service.get_user_by_id(db, data.author)
        message = (
            f"New commit {commit.sha[:7]} pushed to branch '{data.branch}' for Ticket {data.ticket_id} "
            f'by {committer.name if committer else data.author}. Message: "{commit.message}".'
        )
        await notification_service.notify_users(
            db, [data.author, updated.requesting_user_id if updated else None], message
        )
        return CommitActionResult(success=True, commit=commit)
    except Exception as e:
        logger.exception("Error creating commit for ticket %s", data.ticket_id)
        return CommitActionResult(success=False, error=str(e) or "An unknown server error occurred.")
