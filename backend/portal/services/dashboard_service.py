"""Dashboard service."""
from collections import Counter
from datetime import timedelta
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.models.base import utc_now
from portal.models.ticket import CLOSED_STATUSES
from portal.models.user import User, UserRole
from portal.schemas.dashboard import DailyCount, DashboardResponse
from portal.schemas.github import ALL_PROJECTS
from portal.schemas.user import UserResponse
from portal.services import github_service, ticket_service, user_service


async def get_dashboard(db: AsyncSession, user: Optional[User] = None) -> DashboardResponse:
    """
    Build the dashboard for a user.

    Admins and superusers see every ticket and the global counters. Clients
    see their own tickets, their counters and tickets created per day.
    Without a user only commits and users are returned.
    """
    tickets = await ticket_service.get_tickets(db)
    commits = await github_service.get_commits(db, ALL_PROJECTS)
    users = await user_service.get_users(db)

    dashboard = DashboardResponse(
        github_commits=commits,
        users=[UserResponse.from_user(u) for u in users],
    )
    if user is None:
        return dashboard

    if user.role in (UserRole.ADMIN, UserRole.SUPERUSER):
        one_week_ago = utc_now() - timedelta(weeks=1)
        dashboard.tickets = tickets
        dashboard.total_tickets_count = len(tickets)
        dashboard.closed_tickets_count = sum(1 for t in tickets if t.status in CLOSED_STATUSES)
        dashboard.pending_tickets_count = len(tickets) - dashboard.closed_tickets_count
        dashboard.commits_last_week_count = sum(1 for c in commits if c.date > one_week_ago)
    else:
        mine = [t for t in tickets if t.requesting_user_id == user.id]
        closed = sum(1 for t in mine if t.status in CLOSED_STATUSES)
        dashboard.tickets = mine
        dashboard.my_total_tickets_count = len(mine)
        dashboard.my_closed_tickets_count = closed
        dashboard.my_active_tickets_count = len(mine) - closed

        per_day = Counter(
            t.created_at.date().isoformat() for t in mine if t.created_at is not None
        )
        dashboard.my_tickets_over_time = [
            DailyCount(date=day, count=count) for day, count in sorted(per_day.items())
        ]
    return dashboard
