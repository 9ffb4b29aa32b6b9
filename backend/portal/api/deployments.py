"""Deployments API routes."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.actions import deployment_actions
from portal.core.page_cache import DEPLOYMENTS_PATH, page_cache
from portal.database import get_db
from portal.models.deployment import DeploymentLogEntry
from portal.schemas.deployment import DeploymentActionResult, DeploymentCreate
from portal.services import deployment_service

router = APIRouter()


@router.get("", response_model=List[DeploymentLogEntry])
async def list_deployments(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Get all deployment logs, newest first."""
    async def load():
        logs = await deployment_service.get_deployment_logs(db)
        return [log.to_document() for log in logs]

    return await page_cache.get_or_load(DEPLOYMENTS_PATH, request.url.query, load)


@router.post("", response_model=DeploymentActionResult, status_code=status.HTTP_201_CREATED)
async def create_deployment(
    data: DeploymentCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Log a deployment; linked tickets get a history entry each."""
    result = await deployment_actions.create_deployment_action(db, data)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("/{deployment_id}", response_model=DeploymentLogEntry)
async def get_deployment(
    deployment_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a deployment log by ID."""
    log = await deployment_service.get_deployment_log_by_id(db, deployment_id)
    if not log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Deployment not found",
        )
    return log
