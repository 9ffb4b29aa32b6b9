"""API routes."""
from fastapi import APIRouter
from portal.api import audit, dashboard, deployments, github, maximo, organizations, tickets, users

api_router = APIRouter()

api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(tickets.router, prefix="/tickets", tags=["Tickets"])
api_router.include_router(deployments.router, prefix="/deployments", tags=["Deployments"])
api_router.include_router(github.router, prefix="/github", tags=["GitHub"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(organizations.router, prefix="/organizations", tags=["Organizations"])
api_router.include_router(maximo.router, prefix="/maximo", tags=["Maximo"])
api_router.include_router(audit.router, prefix="/audit-log", tags=["Audit"])
