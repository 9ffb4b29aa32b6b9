"""Tests for deployment logs and their ticket fan-out."""
import logging
import pytest
from portal.actions.deployment_actions import create_deployment_action
from portal.models.deployment import DeployedFile, DeploymentEnvironment, DeploymentStatus
from portal.schemas.deployment import DeploymentCreate
from portal.services import deployment_service, ticket_service


def deployment(**overrides) -> DeploymentCreate:
    fields = dict(
        user_id="admin",
        files_deployed=[DeployedFile(name="script_ABC.py", version="1.3", type="script")],
        environment=DeploymentEnvironment.QA,
        status=DeploymentStatus.SUCCESS,
        result_code="200",
    )
    fields.update(overrides)
    return DeploymentCreate(**fields)


async def test_logs_newest_first(seeded_db):
    logs = await deployment_service.get_deployment_logs(seeded_db)
    assert [log.id for log in logs] == ["deploy-2", "deploy-1"]


async def test_get_log_by_id(seeded_db):
    log = await deployment_service.get_deployment_log_by_id(seeded_db, "deploy-2")
    assert log.status == DeploymentStatus.FAILURE
    assert log.ticket_ids == ["MAS-002"]
    assert await deployment_service.get_deployment_log_by_id(seeded_db, "deploy-404") is None


async def test_create_log(seeded_db):
    log = await deployment_service.create_deployment_log(seeded_db, deployment())
    assert log.id.startswith("deploy-")
    stored = await deployment_service.get_deployment_log_by_id(seeded_db, log.id)
    assert stored.files_deployed[0].name == "script_ABC.py"


@pytest.mark.parametrize("ticket_ids", [["MAS-001", "MAS-003"], ["MAS-003", "MAS-001"]])
async def test_each_linked_ticket_gets_exactly_one_entry(seeded_db, ticket_ids):
    before = {t.id: len(t.history) for t in await ticket_service.get_tickets(seeded_db)}

    result = await create_deployment_action(seeded_db, deployment(ticket_ids=ticket_ids))
    assert result.success

    after = {t.id: t for t in await ticket_service.get_tickets(seeded_db)}
    for ticket_id in ("MAS-001", "MAS-003"):
        assert len(after[ticket_id].history) == before[ticket_id] + 1
        entry = after[ticket_id].history[-1]
        assert entry.action == "Deployment Logged"
        assert entry.deployment_id == result.log.id
    assert len(after["MAS-002"].history) == before["MAS-002"]


async def test_missing_ticket_does_not_fail_deployment(seeded_db, caplog):
    with caplog.at_level(logging.WARNING):
        result = await create_deployment_action(seeded_db, deployment(ticket_ids=["MAS-404", "MAS-001"]))
    assert result.success
    assert "failed to add history to ticket MAS-404" in caplog.text
    ticket = await ticket_service.get_ticket_by_id(seeded_db, "MAS-001")
    assert ticket.history[-1].deployment_id == result.log.id


async def test_requires_files(seeded_db):
    result = await create_deployment_action(seeded_db, deployment(files_deployed=[]))
    assert not result.success
    assert "at least one deployed file" in result.error
