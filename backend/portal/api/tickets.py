"""Tickets API routes."""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.actions import ticket_actions
from portal.core.page_cache import TICKETS_PATH, page_cache, ticket_path
from portal.database import get_db
from portal.models.ticket import (
    Ticket,
    TicketHistoryEntry,
    TicketPriority,
    TicketStatus,
    TicketType,
)
from portal.schemas.ticket import (
    AttachmentsAdd,
    CommentCreate,
    TicketActionResult,
    TicketCreate,
    TicketFilters,
    TicketUpdate,
)
from portal.services import ticket_service

router = APIRouter()


def _action_status(result: TicketActionResult, response: Response) -> TicketActionResult:
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("", response_model=List[Ticket])
async def list_tickets(
    request: Request,
    requesting_user_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    status_filter: Optional[TicketStatus] = Query(None, alias="status"),
    priority: Optional[TicketPriority] = None,
    ticket_type: Optional[TicketType] = Query(None, alias="type"),
    assignee_id: Optional[str] = None,
    provider: Optional[str] = None,
    search_term: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    List tickets, newest first.

    - requesting_user_id: only tickets requested by this user (my tickets)
    - assignee_id: "unassigned" selects tickets with nobody assigned
    - search_term: case-insensitive match on id, title, description and people
    """
    filters = TicketFilters(
        date_from=date_from,
        date_to=date_to,
        status=status_filter,
        priority=priority,
        type=ticket_type,
        assignee_id=assignee_id,
        provider=provider,
        search_term=search_term,
    )

    async def load():
        tickets = await ticket_service.get_tickets(db, requesting_user_id)
        return [ticket.to_document() for ticket in ticket_service.filter_tickets(tickets, filters)]

    return await page_cache.get_or_load(TICKETS_PATH, request.url.query, load)


@router.post("", response_model=TicketActionResult, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    data: TicketCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a new ticket."""
    result = await ticket_actions.create_ticket_action(db, data)
    return _action_status(result, response)


@router.get("/histories", response_model=List[TicketHistoryEntry])
async def list_ticket_histories(db: AsyncSession = Depends(get_db)):
    """Every history entry of every ticket, newest first."""
    return await ticket_service.get_all_ticket_histories(db)


@router.get("/{ticket_id}", response_model=Ticket)
async def get_ticket(
    ticket_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a ticket by its id."""
    async def load():
        ticket = await ticket_service.get_ticket_by_id(db, ticket_id)
        return ticket.to_document() if ticket else None

    ticket = await page_cache.get_or_load(ticket_path(ticket_id), "", load)
    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found",
        )
    return ticket


@router.patch("/{ticket_id}", response_model=TicketActionResult)
async def update_ticket(
    ticket_id: str,
    data: TicketUpdate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a ticket.

    Can update: status, assignee ("" unassigns), priority, type, with an
    optional comment. Fields equal to their current value are ignored.
    """
    result = await ticket_actions.update_ticket_action(db, ticket_id, data)
    return _action_status(result, response)


@router.post("/{ticket_id}/comments", response_model=TicketActionResult)
async def add_comment(
    ticket_id: str,
    data: CommentCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Comment on a ticket."""
    result = await ticket_actions.add_comment_action(db, ticket_id, data)
    return _action_status(result, response)


@router.post("/{ticket_id}/attachments", response_model=TicketActionResult)
async def add_attachments(
    ticket_id: str,
    data: AttachmentsAdd,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Attach files to a ticket."""
    result = await ticket_actions.add_attachments_action(db, ticket_id, data)
    return _action_status(result, response)
