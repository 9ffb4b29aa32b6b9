"""User and organization actions."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.page_cache import DASHBOARD_PATH, ORGANIZATIONS_PATH, USERS_PATH, revalidate_path
from portal.schemas.user import (
    OrganizationActionResult,
    OrganizationUpsert,
    UserActionResult,
    UserResponse,
    UserUpsert,
)
from portal.services import notification_service, user_service

logger = logging.getLogger(__name__)


async def create_or_update_user_action(db: AsyncSession, data: UserUpsert) -> UserActionResult:
    """Create or update a user and notify them and the superuser."""
    if not (data.username and data.name and data.role and data.email and data.password):
        return UserActionResult(success=False, error="Username, name, email, password and role are required.")

    try:
        action_text = "updated" if data.id else "created"
        user = await user_service.create_or_update_user(db, data)
        revalidate_path(USERS_PATH)
        revalidate_path(DASHBOARD_PATH)

        notification_service.send_notification(
            [user.email],
            f"Your account has been {action_text}. Username: {user.username}, Role: {user.role.value}. "
            f"Login with the provided password.",
        )
        superuser_emails = [
            email for email in await notification_service.collect_recipients(db, [])
            if email != user.email
        ]
        notification_service.send_notification(
            superuser_emails,
            f"User account for {user.email} has been {action_text}. "
            f"Details: Username: {user.username}, Role: {user.role.value}.",
        )
        return UserActionResult(success=True, user=UserResponse.from_user(user))
    except Exception as e:
        logger.exception("Error creating or updating user %s", data.username)
        return UserActionResult(success=False, error=str(e) or "An unknown server error occurred.")


async def create_or_update_organization_action(
    db: AsyncSession,
    data: OrganizationUpsert,
) -> OrganizationActionResult:
    """Create or update an organization and notify the superuser."""
    if not data.id or not data.name:
        return OrganizationActionResult(success=False, error="Organization ID (slug) and name are required.")

    try:
        existing = await user_service.get_organization_by_id(db, data.id)
        organization = await user_service.create_or_update_organization(db, data)
        revalidate_path(ORGANIZATIONS_PATH)

        action_text = "updated" if existing else "created"
        await notification_service.notify_users(
            db, [], f"Organization '{organization.name}' (ID: {organization.id}) has been {action_text}."
        )
        return OrganizationActionResult(success=True, organization=organization)
    except Exception as e:
        logger.exception("Error creating or updating organization %s", data.id)
        return OrganizationActionResult(success=False, error=str(e) or "An unknown server error occurred.")
