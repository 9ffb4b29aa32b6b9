"""Deployment actions."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import (
    AUDIT_LOG_PATH,
    DASHBOARD_PATH,
    DEPLOYMENTS_PATH,
    TICKETS_PATH,
    revalidate_path,
    ticket_path,
)
from portal.schemas.deployment import DeploymentActionResult, DeploymentCreate
from portal.services import deployment_service, ticket_service

logger = logging.getLogger(__name__)


async def create_deployment_action(db: AsyncSession, data: DeploymentCreate) -> DeploymentActionResult:
    """
    Log a deployment and record it on every linked ticket.

    Tickets are updated one after another without rollback: a ticket that
    cannot be updated is logged and does not fail the deployment.
    """
    if not data.user_id or not data.environment or not data.status or not data.files_deployed:
        return DeploymentActionResult(
            success=False,
            error="User ID, environment, status, and at least one deployed file are required.",
        )

    try:
        log = await deployment_service.create_deployment_log(db, data)

        for ticket_id in log.ticket_ids:
            try:
                ticket = await ticket_service.add_deployment_to_ticket_history(
                    db, ticket_id, log.id, log.user_id, log.environment.value, log.status.value
                )
            except Exception:
                logger.exception("Deployment %s logged, but updating ticket %s raised", log.id, ticket_id)
                ticket = None
            if not ticket:
                logger.warning("Deployment %s logged, but failed to add history to ticket %s", log.id, ticket_id)
            revalidate_path(ticket_path(ticket_id))

        revalidate_path(DEPLOYMENTS_PATH)
        revalidate_path(AUDIT_LOG_PATH)
        revalidate_path(DASHBOARD_PATH)
        if log.ticket_ids:
            revalidate_path(TICKETS_PATH)
        return DeploymentActionResult(success=True, log=log)
    except Exception as e:
        logger.exception("Error creating deployment log")
        return DeploymentActionResult(success=False, error=str(e) or "An unknown server error occurred.")
