"""Tests for commits, file versions and file restoration."""
from portal.actions.file_actions import restore_file_version_action
from portal.actions.github_actions import create_commit_and_push_action
from portal.models.ticket import TicketStatus
from portal.schemas.github import ALL_PROJECTS, CommitCreate, FileRestoreRequest
from portal.services import github_service, ticket_service


async def test_all_projects_excludes_ticket_commits(seeded_db):
    commits = await github_service.get_commits(seeded_db, ALL_PROJECTS)
    assert [c.sha for c in commits] == ["a1b2c3d4e5f6", "f6e5d4c3b2a1", "c7g8h9i0j1k2"]


async def test_all_projects_falls_back_to_every_commit(db):
    await github_service.create_commit(db, "MAS-001", "First", "admin")
    await github_service.create_commit(db, "MAS-002", "Second", "admin")
    assert len(await github_service.get_commits(db, ALL_PROJECTS)) == 2


async def test_commits_of_a_ticket(seeded_db):
    commits = await github_service.get_commits(seeded_db, "MAS-001")
    assert [c.sha for c in commits] == ["l3m4n5o6p7q8"]


async def test_ticket_commits_do_not_match_longer_ids(db):
    await github_service.create_commit(db, "MAS-100", "Fix", "admin")
    await github_service.create_commit(db, "MAS-1001", "Other", "admin")
    commits = await github_service.get_commits(db, "MAS-100")
    assert [c.message for c in commits] == ["MAS-100: Fix"]


async def test_create_commit(db):
    commit = await github_service.create_commit(
        db, "MAS-007", "Add script", "admin", ["script.py"], repository="maximo-tla"
    )
    assert commit.message == "MAS-007: Add script"
    assert len(commit.sha) == 10
    assert commit.url == f"https://github.com/maximo-tla/commit/{commit.sha}"
    assert commit.files_changed == ["script.py"]


def test_repository_for_ticket():
    assert github_service.repository_for_ticket("MAX-TLA-1") == "maximo-tla"
    assert github_service.repository_for_ticket("MAX-FEMA-2") == "maximo-fema"
    assert github_service.repository_for_ticket("MAS-003") == "example/repo"


async def test_file_versions_from_commits(seeded_db):
    versions = await github_service.get_file_versions(seeded_db, "script_ABC.py")
    assert [v.id for v in versions] == ["l3m4n5o"]
    assert versions[0].commit_sha == "l3m4n5o6p7q8"


async def test_generic_file_versions(seeded_db):
    versions = await github_service.get_file_versions(seeded_db, "unknown.xml")
    assert [v.id for v in versions] == ["v3.0-unk", "v2.1-unk", "v1.0-unk"]


async def test_commit_and_push_updates_ticket(seeded_db):
    result = await create_commit_and_push_action(
        seeded_db,
        CommitCreate(ticket_id="MAS-001", message="Fix script", author="admin", file_names=["script_ABC.py"]),
    )
    assert result.success
    assert "maximo-tla" in result.commit.url

    ticket = await ticket_service.get_ticket_by_id(seeded_db, "MAS-001")
    assert ticket.status == TicketStatus.EN_PROGRESO
    assert ticket.history[-1].action == "Commit Added"
    assert ticket.history[-1].commit_sha == result.commit.sha

    commits = await github_service.get_commits(seeded_db, "MAS-001")
    assert result.commit.sha in [c.sha for c in commits]


async def test_commit_requires_message(seeded_db):
    result = await create_commit_and_push_action(
        seeded_db, CommitCreate(ticket_id="MAS-001", message="", author="admin")
    )
    assert not result.success


async def test_restore_logs_on_ticket(seeded_db):
    result = await restore_file_version_action(
        seeded_db,
        FileRestoreRequest(
            user_id="admin",
            file_name="script_ABC.py",
            version_id="l3m4n5o",
            commit_sha="l3m4n5o6p7q8",
            ticket_id="MAS-001",
        ),
    )
    assert result.success
    ticket = await ticket_service.get_ticket_by_id(seeded_db, "MAS-001")
    assert ticket.history[-1].action == "File Restored"
    assert ticket.history[-1].restored_version_id == "l3m4n5o"


async def test_restore_without_ticket(seeded_db):
    result = await restore_file_version_action(
        seeded_db, FileRestoreRequest(user_id="admin", file_name="a.xml", version_id="v1.0-a.x")
    )
    assert result.success


async def test_restore_requires_version(seeded_db):
    result = await restore_file_version_action(
        seeded_db, FileRestoreRequest(user_id="admin", file_name="a.xml")
    )
    assert not result.success
