"""Simulated e-mail notifications."""
import logging
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.config import get_settings
from portal.services import user_service

logger = logging.getLogger(__name__)


async def collect_recipients(
    db: AsyncSession,
    user_ids: Iterable[Optional[str]],
    include_superuser: bool = True,
) -> List[str]:
    """E-mail addresses of the given users (and the superuser), without duplicates."""
    ids = list(user_ids)
    if include_superuser:
        ids.append(get_settings().superuser_id)

    recipients: List[str] = []
    seen_ids = set()
    for user_id in ids:
        if not user_id or user_id in seen_ids:
            continue
        seen_ids.add(user_id)
        user = await user_service.get_user_by_id(db, user_id)
        if user and user.email and user.email not in recipients:
            recipients.append(user.email)
    return recipients


def send_notification(recipients: Iterable[str], message: str) -> int:
    """Log one simulated e-mail per recipient. Returns how many were sent."""
    if not get_settings().notifications_enabled:
        logger.info("Notifications disabled, skipped: %s", message)
        return 0
    sent = 0
    for email in recipients:
        logger.info("Simulated Email Notification to %s: %s", email, message)
        sent += 1
    return sent


async def notify_users(
    db: AsyncSession,
    user_ids: Iterable[Optional[str]],
    message: str,
    include_superuser: bool = True,
) -> int:
    """Notify the given users and the superuser."""
    recipients = await collect_recipients(db, user_ids, include_superuser)
    return send_notification(recipients, message)
