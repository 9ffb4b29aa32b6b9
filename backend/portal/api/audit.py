"""Audit log API routes."""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import AUDIT_LOG_PATH, page_cache
from portal.database import get_db
from portal.schemas.audit import AuditActionType, AuditFilters, AuditLogEntry
from portal.services import audit_service

router = APIRouter()


@router.get("", response_model=List[AuditLogEntry])
async def get_audit_log(
    request: Request,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    user_id: Optional[str] = None,
    action_type: Optional[AuditActionType] = None,
    search_term: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Ticket history and deployments in one timeline, newest first.

    - action_type: deployment, ticket_status_change, ticket_commit,
      ticket_created or file_restored
    """
    filters = AuditFilters(
        date_from=date_from,
        date_to=date_to,
        user_id=user_id,
        action_type=action_type,
        search_term=search_term,
    )

    async def load():
        entries = await audit_service.get_audit_log(db, filters)
        return [entry.to_document() for entry in entries]

    return await page_cache.get_or_load(AUDIT_LOG_PATH, request.url.query, load)
