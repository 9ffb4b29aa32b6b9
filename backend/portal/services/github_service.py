"""Commit and file version service."""
import logging
import secrets
import string
from datetime import timedelta
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.latency import simulate_latency
from portal.models.base import utc_now
from portal.models.commit import FileVersion, GitHubCommit
from portal.schemas.github import ALL_PROJECTS
from portal.stores import COMMITS, get_collection

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = "example/repo"

# Message prefixes of commits tied to a ticket
TICKET_PREFIXES = ("MAX-", "MAS-")

_SHA_ALPHABET = string.ascii_lowercase + string.digits


def _sort_newest_first(commits: List[GitHubCommit]) -> List[GitHubCommit]:
    return sorted(commits, key=lambda commit: commit.date, reverse=True)


def repository_for_ticket(ticket_id: str) -> str:
    """Repository a ticket's commits go to when the ticket names none."""
    if "-TLA" in ticket_id:
        return "maximo-tla"
    if "-FEMA" in ticket_id:
        return "maximo-fema"
    return DEFAULT_REPOSITORY


async def list_commits(db: AsyncSession) -> List[GitHubCommit]:
    documents = await get_collection(db, COMMITS).list()
    return _sort_newest_first([GitHubCommit.from_document(document) for document in documents])


async def get_commits(db: AsyncSession, ticket_id: str) -> List[GitHubCommit]:
    """
    Get commits for a ticket, or general commits for ALL_PROJECTS.

    A ticket's commits are those whose message starts with "<ticket id>:".

    ALL_PROJECTS returns the commits not tied to any ticket, or every commit
    when all of them are.
    """
    await simulate_latency(0.5)
    commits = await list_commits(db)
    if ticket_id == ALL_PROJECTS:
        general = [commit for commit in commits if not commit.message.startswith(TICKET_PREFIXES)]
        return general or commits
    prefix = f"{ticket_id}:"
    return [commit for commit in commits if commit.message.startswith(prefix)]


async def create_commit(
    db: AsyncSession,
    ticket_id: str,
    message: str,
    author: str,
    file_names: Optional[List[str]] = None,
    branch: str = "dev",
    repository: Optional[str] = None,
) -> GitHubCommit:
    """Record a commit pushed for a ticket. The push itself is simulated."""
    await simulate_latency()
    sha = "".join(secrets.choice(_SHA_ALPHABET) for _ in range(10))
    repository = repository or repository_for_ticket(ticket_id)
    commit = GitHubCommit(
        sha=sha,
        message=f"{ticket_id}: {message}",
        author=author,
        url=f"https://github.com/{repository}/commit/{sha}",
        date=utc_now(),
        files_changed=list(file_names or []),
    )
    await get_collection(db, COMMITS).put(commit.to_document())
    logger.info("Simulated commit %s to %s branch of %s", sha, branch, repository)
    return commit


def _generic_versions(file_name: str) -> List[FileVersion]:
    now = utc_now()
    prefix = file_name[:3]
    return [
        FileVersion(id=f"v3.0-{prefix}", timestamp=now - timedelta(days=1), commit_sha="sha-abc123",
                    author="Admin User", message=f"Update {file_name}", file_name=file_name),
        FileVersion(id=f"v2.1-{prefix}", timestamp=now - timedelta(days=3), commit_sha="sha-def456",
                    author="Dev Team", message=f"Refactor {file_name}", file_name=file_name),
        FileVersion(id=f"v1.0-{prefix}", timestamp=now - timedelta(days=7), commit_sha="sha-ghi789",
                    author="Initial Committer", message=f"Initial version of {file_name}", file_name=file_name),
    ]


async def get_file_versions(db: AsyncSession, file_name: str) -> List[FileVersion]:
    """Versions of a file, one per commit touching or mentioning it, newest first."""
    await simulate_latency(0.5)
    relevant = [
        commit for commit in await list_commits(db)
        if file_name in commit.files_changed or file_name in commit.message
    ]
    if not relevant:
        return _generic_versions(file_name)
    return [
        FileVersion(
            id=commit.sha[:7],
            timestamp=commit.date,
            commit_sha=commit.sha,
            author=commit.author,
            message=commit.message,
            file_name=file_name,
        )
        for commit in relevant
    ]
