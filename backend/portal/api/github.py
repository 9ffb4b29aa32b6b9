"""Commit and file version API routes."""
from typing import List
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.actions import file_actions, github_actions
from portal.core.page_cache import COMMITS_PATH, page_cache
from portal.database import get_db
from portal.models.commit import FileVersion, GitHubCommit
from portal.schemas.github import (
    ALL_PROJECTS,
    ActionResult,
    CommitActionResult,
    CommitCreate,
    FileRestoreRequest,
)
from portal.services import github_service

router = APIRouter()


@router.get("/commits", response_model=List[GitHubCommit])
async def list_commits(
    request: Request,
    ticket_id: str = ALL_PROJECTS,
    db: AsyncSession = Depends(get_db),
):
    """Commits of a ticket, or general commits with ticket_id=ALL_PROJECTS."""
    async def load():
        commits = await github_service.get_commits(db, ticket_id)
        return [commit.to_document() for commit in commits]

    return await page_cache.get_or_load(COMMITS_PATH, request.url.query, load)


@router.post("/commits", response_model=CommitActionResult, status_code=status.HTTP_201_CREATED)
async def create_commit(
    data: CommitCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Commit and push changes for a ticket."""
    result = await github_actions.create_commit_and_push_action(db, data)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("/files/{file_name}/versions", response_model=List[FileVersion])
async def list_file_versions(
    file_name: str,
    db: AsyncSession = Depends(get_db),
):
    """Version history of a file."""
    return await github_service.get_file_versions(db, file_name)


@router.post("/files/restore", response_model=ActionResult)
async def restore_file_version(
    data: FileRestoreRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Restore a file to an earlier version."""
    result = await file_actions.restore_file_version_action(db, data)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result
