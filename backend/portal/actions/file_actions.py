"""File version actions."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.latency import simulate_latency
from portal.core.page_cache import (
    AUDIT_LOG_PATH,
    DASHBOARD_PATH,
    TICKETS_PATH,
    revalidate_path,
    ticket_path,
)
from portal.schemas.github import ActionResult, FileRestoreRequest
from portal.services import ticket_service

logger = logging.getLogger(__name__)


async def restore_file_version_action(db: AsyncSession, data: FileRestoreRequest) -> ActionResult:
    """Restore a file to an earlier version, logging it on a ticket when one is given."""
    if not data.user_id or not data.file_name or not data.version_id:
        return ActionResult(success=False, error="User ID, file name, and version ID are required.")

    try:
        logger.info(
            "Simulating restoration of %s to version %s (commit: %s) by %s",
            data.file_name, data.version_id, data.commit_sha or "N/A", data.user_id,
        )
        await simulate_latency(2)

        if data.ticket_id:
            ticket = await ticket_service.add_restoration_to_ticket_history(
                db, data.ticket_id, data.user_id, data.file_name, data.version_id, data.commit_sha
            )
            if not ticket:
                logger.warning(
                    "File %s restored, but failed to add history to ticket %s",
                    data.file_name, data.ticket_id,
                )
            revalidate_path(ticket_path(data.ticket_id))
            revalidate_path(TICKETS_PATH)
            revalidate_path(AUDIT_LOG_PATH)

        revalidate_path(DASHBOARD_PATH)
        return ActionResult(success=True)
    except Exception as e:
        logger.exception("Error restoring %s", data.file_name)
        return ActionResult(success=False, error=str(e) or "An unknown server error occurred during file restoration.")
