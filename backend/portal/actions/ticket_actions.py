"""Ticket actions: validate, mutate, revalidate cached pages, notify."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import (
    AUDIT_LOG_PATH,
    DASHBOARD_PATH,
    TICKETS_PATH,
    revalidate_path,
    ticket_path,
)
from portal.models.ticket import TicketStatus
from portal.models.user import UserRole
from portal.schemas.ticket import (
    AttachmentsAdd,
    CommentCreate,
    TicketActionResult,
    TicketCreate,
    TicketUpdate,
)
from portal.services import notification_service, ticket_service, user_service

logger = logging.getLogger(__name__)


def _revalidate_ticket_pages(ticket_id: str) -> None:
    revalidate_path(DASHBOARD_PATH)
    revalidate_path(TICKETS_PATH)
    revalidate_path(ticket_path(ticket_id))
    revalidate_path(AUDIT_LOG_PATH)


async def create_ticket_action(db: AsyncSession, data: TicketCreate) -> TicketActionResult:
    """Create a ticket. Clients must choose the environment/branch."""
    if not (data.title and data.description and data.priority and data.type and data.requesting_user_id):
        return TicketActionResult(success=False, error="Todos los campos obligatorios deben ser completados.")

    try:
        requesting_user = await user_service.get_user_by_id(db, data.requesting_user_id)
        if requesting_user and requesting_user.role == UserRole.CLIENT and not data.branch:
            return TicketActionResult(success=False, error="El ambiente/branch es obligatorio para los clientes.")

        ticket = await ticket_service.create_ticket(db, data)
        _revalidate_ticket_pages(ticket.id)

        message = (
            f'New Ticket Created: {ticket.id} - "{ticket.title}" by {data.requesting_user_id}. '
            f"Type: {ticket.type.value}. Priority: {ticket.priority.value}."
        )
        if ticket.branch:
            message += f" Environment/Branch: {ticket.branch.value}."
        message += " Ticket is currently unassigned." if not ticket.assignee_id else f" Assigned to {ticket.assignee_id}."

        recipients = await notification_service.collect_recipients(db, [data.requesting_user_id])
        if data.requesting_user_email and data.requesting_user_email not in recipients:
            recipients.insert(0, data.requesting_user_email)
        notification_service.send_notification(recipients, message)

        return TicketActionResult(success=True, ticket=ticket)
    except Exception as e:
        logger.exception("Error creating ticket")
        return TicketActionResult(success=False, error=str(e) or "Error desconocido al crear el ticket.")


async def update_ticket_action(
    db: AsyncSession,
    ticket_id: str,
    data: TicketUpdate,
) -> TicketActionResult:
    """Update a ticket's status, assignee, priority and/or type, optionally with a comment."""
    if not ticket_id:
        return TicketActionResult(success=False, error="Ticket ID is required.")
    if not data.user_id:
        return TicketActionResult(success=False, error="User ID performing action is required.")
    if not data.has_updates():
        return TicketActionResult(
            success=False,
            error="At least one update (status, assignee, priority, type, or comment) must be provided.",
        )

    try:
        ticket = await ticket_service.update_ticket(db, ticket_id, data)
        if not ticket:
            return TicketActionResult(
                success=False,
                error="Failed to update ticket. Ticket not found or API error.",
            )
        _revalidate_ticket_pages(ticket_id)

        performing_user = await user_service.get_user_by_id(db, data.user_id)
        message = f"Ticket {ticket_id} updated by {performing_user.name if performing_user else data.user_id}."
        reopened = data.new_status == TicketStatus.REABIERTO
        if data.new_status:
            message += f" New status: {data.new_status.value}."
            if reopened and not data.comment:
                message += " Ticket has been reopened."
        if data.new_assignee_id is not None:
            message += f" Assignee changed to {data.new_assignee_id or 'Unassigned'}."
        if data.new_priority:
            message += f" Priority changed to {data.new_priority.value}."
        if data.new_type:
            message += f" Type changed to {data.new_type.value}."
        if data.comment and not reopened:
            message += f' Comment: "{data.comment}".'

        await notification_service.notify_users(
            db, [data.user_id, ticket.requesting_user_id, ticket.assignee_id], message
        )
        return TicketActionResult(success=True, ticket=ticket)
    except Exception as e:
        logger.exception("Error updating ticket %s", ticket_id)
        return TicketActionResult(success=False, error=str(e) or "An unknown server error occurred during ticket update.")


async def add_comment_action(
    db: AsyncSession,
    ticket_id: str,
    data: CommentCreate,
) -> TicketActionResult:
    """Comment on a ticket, with optional attachments."""
    if not ticket_id or not data.user_id or not data.comment:
        return TicketActionResult(success=False, error="Ticket ID, user ID, and comment text are required.")

    try:
        ticket = await ticket_service.add_comment_to_ticket(
            db, ticket_id, data.user_id, data.comment, data.attachment_names
        )
        if not ticket:
            return TicketActionResult(success=False, error="Failed to add comment. Ticket not found or API error.")
        _revalidate_ticket_pages(ticket_id)

        performing_user = await user_service.get_user_by_id(db, data.user_id)
        message = (
            f"New comment on Ticket {ticket_id} by "
            f'{performing_user.name if performing_user else data.user_id}: "{data.comment}"'
        )
        if data.attachment_names:
            message += f" Attachments: {', '.join(data.attachment_names)}."

        await notification_service.notify_users(
            db, [data.user_id, ticket.requesting_user_id, ticket.assignee_id], message
        )
        return TicketActionResult(success=True, ticket=ticket)
    except Exception as e:
        logger.exception("Error adding comment to ticket %s", ticket_id)
        return TicketActionResult(success=False, error=str(e) or "An unknown server error occurred while adding comment.")


async def add_attachments_action(
    db: AsyncSession,
    ticket_id: str,
    data: AttachmentsAdd,
) -> TicketActionResult:
    """Attach files to a ticket without commenting."""
    try:
        ticket = await ticket_service.add_attachments_to_ticket(
            db, ticket_id, data.user_id, data.attachment_names
        )
        if not ticket:
            return TicketActionResult(success=False, error="Failed to add attachments. Ticket not found or API error.")
        _revalidate_ticket_pages(ticket_id)
        return TicketActionResult(success=True, ticket=ticket)
    except Exception as e:
        logger.exception("Error adding attachments to ticket %s", ticket_id)
        return TicketActionResult(success=False, error=str(e) or "An unknown server error occurred while adding attachments.")
