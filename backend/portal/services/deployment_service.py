"""Deployment log service."""
import logging
import uuid
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.latency import simulate_latency
from portal.models.base import utc_now
from portal.models.deployment import (
    DeploymentEnvironment,
    DeploymentLogEntry,
    DeploymentStatus,
)
from portal.schemas.deployment import DeploymentCreate
from portal.stores import DEPLOYMENTS, get_collection

logger = logging.getLogger(__name__)


def generate_deployment_id() -> str:
    return f"deploy-{uuid.uuid4().hex[:12]}"


async def get_deployment_logs(db: AsyncSession) -> List[DeploymentLogEntry]:
    """Get all deployment logs, newest first."""
    await simulate_latency(0.5)
    documents = await get_collection(db, DEPLOYMENTS).list()
    logs = [DeploymentLogEntry.from_document(document) for document in documents]
    return sorted(logs, key=lambda log: log.timestamp, reverse=True)


async def get_deployment_log_by_id(db: AsyncSession, deployment_id: str) -> Optional[DeploymentLogEntry]:
    """Get a deployment log by its id."""
    await simulate_latency(0.2)
    document = await get_collection(db, DEPLOYMENTS).get(deployment_id)
    return DeploymentLogEntry.from_document(document) if document else None


async def create_deployment_log(db: AsyncSession, data: DeploymentCreate) -> DeploymentLogEntry:
    """Create a deployment log entry. Linked tickets are not touched here."""
    await simulate_latency()
    log = DeploymentLogEntry(
        id=generate_deployment_id(),
        timestamp=utc_now(),
        user_id=data.user_id,
        files_deployed=data.files_deployed,
        environment=data.environment or DeploymentEnvironment.DEV,
        status=data.status or DeploymentStatus.PENDING,
        result_code=data.result_code,
        message=data.message,
        ticket_ids=list(data.ticket_ids),
    )
    await get_collection(db, DEPLOYMENTS).put(log.to_document())
    logger.info("Deployment %s logged to %s", log.id, log.environment.value)
    return log
