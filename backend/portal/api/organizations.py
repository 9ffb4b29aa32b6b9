"""Organizations API routes."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.actions import user_actions
from portal.core.page_cache import ORGANIZATIONS_PATH, page_cache
from portal.database import get_db
from portal.models.user import Organization
from portal.schemas.user import OrganizationActionResult, OrganizationUpsert
from portal.services import user_service

router = APIRouter()


@router.get("", response_model=List[Organization])
async def list_organizations(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Get all organizations."""
    async def load():
        organizations = await user_service.get_organizations(db)
        return [organization.to_document() for organization in organizations]

    return await page_cache.get_or_load(ORGANIZATIONS_PATH, request.url.query, load)


@router.post("", response_model=OrganizationActionResult)
async def create_or_update_organization(
    data: OrganizationUpsert,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create or update an organization."""
    result = await user_actions.create_or_update_organization_action(db, data)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("/{organization_id}", response_model=Organization)
async def get_organization(
    organization_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get an organization by slug."""
    organization = await user_service.get_organization_by_id(db, organization_id)
    if not organization:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )
    return organization
