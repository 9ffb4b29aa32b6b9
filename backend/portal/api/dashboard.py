"""Dashboard API routes."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import DASHBOARD_PATH, page_cache
from portal.database import get_db
from portal.schemas.dashboard import DashboardResponse
from portal.services import dashboard_service, user_service

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    user_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Dashboard of a user: global counters for admins, own tickets for clients."""
    user = None
    if user_id:
        user = await user_service.get_user_by_id(db, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

    async def load():
        dashboard = await dashboard_service.get_dashboard(db, user)
        return dashboard.to_document()

    return await page_cache.get_or_load(DASHBOARD_PATH, request.url.query, load)
