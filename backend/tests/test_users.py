"""Tests for users, organizations and notifications."""
import logging
from portal.actions.user_actions import create_or_update_organization_action, create_or_update_user_action
from portal.config import get_settings
from portal.models.user import UserRole
from portal.schemas.user import OrganizationUpsert, UserUpsert
from portal.services import notification_service, user_service


def upsert(**overrides) -> UserUpsert:
    fields = dict(
        username="client-new",
        name="Cliente Nuevo",
        email="client-new@maximo-portal.example.com",
        password="s3cret",
        role=UserRole.CLIENT,
        company="TLA",
    )
    fields.update(overrides)
    return UserUpsert(**fields)


def test_password_hashing():
    hashed = user_service.hash_password("password123")
    assert hashed != "password123"
    assert user_service.verify_password("password123", hashed)
    assert not user_service.verify_password("wrong", hashed)


def test_malformed_hash_never_matches():
    assert not user_service.verify_password("password123", "not-a-bcrypt-hash")


class TestUsers:

    async def test_seeded_users_sorted_by_name(self, seeded_db):
        users = await user_service.get_users(seeded_db)
        names = [u.name.lower() for u in users]
        assert names == sorted(names)
        assert {u.id for u in users} >= {"admin", "superuser", "client-tla1"}

    async def test_get_user_by_id(self, seeded_db):
        user = await user_service.get_user_by_id(seeded_db, "client-tla1")
        assert user.role == UserRole.CLIENT
        assert user.company == "TLA"
        assert await user_service.get_user_by_id(seeded_db, "") is None
        assert await user_service.get_user_by_id(seeded_db, "nobody") is None

    async def test_create_user(self, db):
        user = await user_service.create_or_update_user(db, upsert())
        assert user.id == "client-new"
        assert user_service.verify_password("s3cret", user.password_hash)

    async def test_same_password_keeps_hash(self, db):
        created = await user_service.create_or_update_user(db, upsert())
        updated = await user_service.create_or_update_user(
            db, upsert(id="client-new", name="Cliente Renombrado")
        )
        assert updated.password_hash == created.password_hash
        assert updated.name == "Cliente Renombrado"

    async def test_new_password_is_rehashed(self, db):
        created = await user_service.create_or_update_user(db, upsert())
        updated = await user_service.create_or_update_user(db, upsert(id="client-new", password="changed"))
        assert updated.password_hash != created.password_hash
        assert user_service.verify_password("changed", updated.password_hash)

    async def test_action_hides_password_hash(self, db):
        result = await create_or_update_user_action(db, upsert())
        assert result.success
        assert "passwordHash" not in result.user.to_document()

    async def test_action_requires_password(self, db):
        result = await create_or_update_user_action(db, upsert(password=""))
        assert not result.success
        assert await user_service.get_user_by_id(db, "client-new") is None


class TestOrganizations:

    async def test_sorted_by_name(self, seeded_db):
        organizations = await user_service.get_organizations(seeded_db)
        assert [o.name for o in organizations] == ["FEMA", "Maximo Corp", "System Corp", "TLA"]

    async def test_lookup_by_name(self, seeded_db):
        organization = await user_service.get_organization_by_name(seeded_db, "TLA")
        assert organization.github_repository == "maximo-tla"
        assert await user_service.get_organization_by_name(seeded_db, "Unknown") is None

    async def test_create_then_update(self, seeded_db):
        result = await create_or_update_organization_action(
            seeded_db, OrganizationUpsert(id="acme", name="Acme", github_repository="")
        )
        assert result.success
        assert result.organization.github_repository is None

        await create_or_update_organization_action(
            seeded_db, OrganizationUpsert(id="acme", name="Acme", github_repository="maximo-acme")
        )
        organization = await user_service.get_organization_by_id(seeded_db, "acme")
        assert organization.github_repository == "maximo-acme"

    async def test_requires_slug(self, seeded_db):
        result = await create_or_update_organization_action(seeded_db, OrganizationUpsert(name="Acme"))
        assert not result.success


class TestNotifications:

    async def test_recipients_include_superuser_once(self, seeded_db):
        recipients = await notification_service.collect_recipients(
            seeded_db, ["client-tla1", None, "client-tla1", "nobody", "superuser"]
        )
        assert recipients == [
            "client-tla1@maximo-portal.example.com",
            "superuser@maximo-portal.example.com",
        ]

    async def test_recipients_without_superuser(self, seeded_db):
        recipients = await notification_service.collect_recipients(
            seeded_db, ["admin"], include_superuser=False
        )
        assert recipients == ["admin@maximo-portal.example.com"]

    def test_send_logs_each_recipient(self, caplog):
        with caplog.at_level(logging.INFO):
            sent = notification_service.send_notification(["a@example.com", "b@example.com"], "hello")
        assert sent == 2
        assert "Simulated Email Notification to b@example.com: hello" in caplog.text

    def test_disabled_notifications(self, monkeypatch):
        monkeypatch.setattr(get_settings(), "notifications_enabled", False)
        assert notification_service.send_notification(["a@example.com"], "hello") == 0
