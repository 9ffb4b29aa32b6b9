"""Tests for ticket mutation bookkeeping."""
from datetime import datetime, timezone
import pytest
from portal.core.history import (
    ACTION_ASSIGNEE_CHANGED,
    ACTION_COMMENT_ADDED,
    ACTION_COMMIT_ADDED,
    ACTION_DEPLOYMENT_LOGGED,
    ACTION_PRIORITY_CHANGED,
    ACTION_REOPENED,
    ACTION_STATUS_CHANGED,
    ACTION_TYPE_CHANGED,
    apply_ticket_update,
    creation_entry,
    is_reopening,
)
from portal.models.ticket import (
    Ticket,
    TicketPriority,
    TicketStatus,
    TicketType,
)

CREATED_AT = datetime(2024, 7, 28, 9, 0, tzinfo=timezone.utc)
UPDATED_AT = datetime(2024, 7, 29, 12, 0, tzinfo=timezone.utc)


def make_ticket(**overrides) -> Ticket:
    fields = dict(
        id="MAS-010",
        title="Fix report",
        description="Report fails",
        status=TicketStatus.ABIERTO,
        type=TicketType.BUG,
        priority=TicketPriority.MEDIA,
        requesting_user_id="client-tla1",
        assignee_id="admin",
        last_updated=CREATED_AT,
        history=[creation_entry("MAS-010", "client-tla1", TicketType.BUG, CREATED_AT)],
    )
    fields.update(overrides)
    return Ticket(**fields)


class TestNoEffectiveChange:
    """Updates that change nothing leave the ticket alone."""

    def test_empty_update(self):
        ticket = make_ticket()
        updated, entries = apply_ticket_update(ticket, "admin", timestamp=UPDATED_AT)
        assert entries == []
        assert updated is ticket
        assert updated.last_updated == CREATED_AT

    def test_same_values(self):
        ticket = make_ticket()
        updated, entries = apply_ticket_update(
            ticket,
            "admin",
            new_status=TicketStatus.ABIERTO,
            new_assignee_id="admin",
            new_priority=TicketPriority.MEDIA,
            new_type=TicketType.BUG,
            timestamp=UPDATED_AT,
        )
        assert entries == []
        assert len(updated.history) == 1
        assert updated.last_updated == CREATED_AT

    def test_unassign_already_unassigned(self):
        ticket = make_ticket(assignee_id=None)
        _, entries = apply_ticket_update(ticket, "admin", new_assignee_id="")
        assert entries == []


class TestSingleFieldChange:
    """Exactly one changed field gives exactly one entry."""

    def test_status(self):
        ticket = make_ticket()
        updated, entries = apply_ticket_update(
            ticket, "admin", new_status=TicketStatus.EN_PROGRESO, timestamp=UPDATED_AT
        )
        assert len(entries) == 1
        entry = entries[0]
        assert entry.action == ACTION_STATUS_CHANGED
        assert entry.from_status == TicketStatus.ABIERTO
        assert entry.to_status == TicketStatus.EN_PROGRESO
        assert entry.user_id == "admin"
        assert entry.ticket_id == "MAS-010"
        assert entry.details == "Estado cambiado de Abierto a En Progreso"
        assert updated.status == TicketStatus.EN_PROGRESO
        assert updated.last_updated == UPDATED_AT
        assert updated.history[-1] == entry

    def test_priority(self):
        _, entries = apply_ticket_update(make_ticket(), "admin", new_priority=TicketPriority.ALTA)
        assert [e.action for e in entries] == [ACTION_PRIORITY_CHANGED]
        assert (entries[0].from_priority, entries[0].to_priority) == (TicketPriority.MEDIA, TicketPriority.ALTA)

    def test_type(self):
        _, entries = apply_ticket_update(make_ticket(), "admin", new_type=TicketType.HOTFIX)
        assert [e.action for e in entries] == [ACTION_TYPE_CHANGED]
        assert (entries[0].from_type, entries[0].to_type) == (TicketType.BUG, TicketType.HOTFIX)

    def test_assignee(self):
        updated, entries = apply_ticket_update(make_ticket(), "admin", new_assignee_id="another-admin")
        assert [e.action for e in entries] == [ACTION_ASSIGNEE_CHANGED]
        assert entries[0].from_assignee_id == "admin"
        assert entries[0].to_assignee_id == "another-admin"
        assert updated.assignee_id == "another-admin"

    def test_empty_assignee_unassigns(self):
        updated, entries = apply_ticket_update(make_ticket(), "admin", new_assignee_id="")
        assert updated.assignee_id is None
        assert entries[0].to_assignee_id is None
        assert entries[0].details == "Ticket desasignado"


class TestCombinedChanges:

    def test_entry_order_and_shared_timestamp(self):
        updated, entries = apply_ticket_update(
            make_ticket(),
            "admin",
            new_type=TicketType.ISSUE,
            new_priority=TicketPriority.BAJA,
            new_assignee_id="another-admin",
            new_status=TicketStatus.PENDIENTE,
            comment="Waiting on the client",
            timestamp=UPDATED_AT,
        )
        assert [e.action for e in entries] == [
            ACTION_STATUS_CHANGED,
            ACTION_ASSIGNEE_CHANGED,
            ACTION_PRIORITY_CHANGED,
            ACTION_TYPE_CHANGED,
            ACTION_COMMENT_ADDED,
        ]
        assert {e.timestamp for e in entries} == {UPDATED_AT}
        assert len(updated.history) == 6

    def test_history_is_append_only(self):
        ticket = make_ticket()
        original = list(ticket.history)
        updated, _ = apply_ticket_update(ticket, "admin", new_status=TicketStatus.CERRADO)
        assert ticket.history == original
        assert updated.history[: len(original)] == original


class TestComments:

    def test_comment_only(self):
        updated, entries = apply_ticket_update(make_ticket(), "admin", comment="Looking into it")
        assert len(entries) == 1
        assert entries[0].action == ACTION_COMMENT_ADDED
        assert entries[0].comment == "Looking into it"
        assert updated.status == TicketStatus.ABIERTO

    def test_commit_reference(self):
        _, entries = apply_ticket_update(
            make_ticket(), "admin", comment="Commit abc1234", commit_sha="abc1234def"
        )
        assert entries[0].action == ACTION_COMMIT_ADDED
        assert entries[0].commit_sha == "abc1234def"

    def test_deployment_reference(self):
        _, entries = apply_ticket_update(
            make_ticket(), "admin", comment="Deployed", deployment_id="deploy-1"
        )
        assert entries[0].action == ACTION_DEPLOYMENT_LOGGED
        assert entries[0].deployment_id == "deploy-1"


class TestReopening:

    @pytest.mark.parametrize("closed", [TicketStatus.CERRADO, TicketStatus.RESUELTO])
    def test_reopen_is_permitted(self, closed):
        ticket = make_ticket(status=closed)
        updated, entries = apply_ticket_update(
            ticket, "client-tla1", new_status=TicketStatus.REABIERTO, comment="Still failing"
        )
        assert updated.status == TicketStatus.REABIERTO
        assert len(entries) == 1
        assert entries[0].action == ACTION_REOPENED
        assert entries[0].comment == "Still failing"
        assert entries[0].from_status == closed

    def test_reopening_detection(self):
        assert is_reopening(TicketStatus.CERRADO, TicketStatus.REABIERTO)
        assert not is_reopening(TicketStatus.ABIERTO, TicketStatus.REABIERTO)
        assert not is_reopening(TicketStatus.CERRADO, TicketStatus.ABIERTO)

    @pytest.mark.parametrize("target", list(TicketStatus))
    def test_any_status_transition_is_allowed(self, target):
        ticket = make_ticket(status=TicketStatus.CERRADO)
        updated, entries = apply_ticket_update(ticket, "admin", new_status=target)
        assert updated.status == target
        assert len(entries) == (0 if target == TicketStatus.CERRADO else 1)
