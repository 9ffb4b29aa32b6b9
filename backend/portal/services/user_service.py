"""User and organization service."""
from typing import List, Optional
import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession
from portal.models.user import Organization, User
from portal.schemas.user import OrganizationUpsert, UserUpsert
from portal.stores import ORGANIZATIONS, USERS, get_collection


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


async def get_users(db: AsyncSession) -> List[User]:
    """Get all users, ordered by display name."""
    documents = await get_collection(db, USERS).list()
    users = [User.from_document(document) for document in documents]
    return sorted(users, key=lambda user: user.name.lower())


async def get_user_by_id(db: AsyncSession, user_id: Optional[str]) -> Optional[User]:
    """Get a user by id (username)."""
    if not user_id:
        return None
    document = await get_collection(db, USERS).get(user_id)
    return User.from_document(document) if document else None


async def create_or_update_user(db: AsyncSession, data: UserUpsert) -> User:
    """Create a user, or update it when it already exists.

    The stored hash is kept when the submitted password matches it.
    """
    user_id = data.id or data.username
    existing = await get_user_by_id(db, user_id)

    if existing and existing.password_hash and verify_password(data.password, existing.password_hash):
        password_hash = existing.password_hash
    else:
        password_hash = hash_password(data.password)

    user = User(
        id=user_id,
        username=data.username,
        name=data.name,
        email=str(data.email),
        role=data.role,
        password_hash=password_hash,
        company=data.company,
        phone=data.phone,
        position=data.position,
    )
    await get_collection(db, USERS).put(user.to_document())
    return user


async def get_organizations(db: AsyncSession) -> List[Organization]:
    """Get all organizations, ordered by name."""
    documents = await get_collection(db, ORGANIZATIONS).list()
    organizations = [Organization.from_document(document) for document in documents]
    return sorted(organizations, key=lambda org: org.name.lower())


async def get_organization_by_id(db: AsyncSession, organization_id: str) -> Optional[Organization]:
    """Get an organization by slug."""
    document = await get_collection(db, ORGANIZATIONS).get(organization_id)
    return Organization.from_document(document) if document else None


async def get_organization_by_name(db: AsyncSession, name: str) -> Optional[Organization]:
    """Find an organization by its display name."""
    for organization in await get_organizations(db):
        if organization.name == name:
            return organization
    return None


async def create_or_update_organization(db: AsyncSession, data: OrganizationUpsert) -> Organization:
    """Create or replace an organization."""
    organization = Organization(
        id=data.id,
        name=data.name,
        github_repository=data.github_repository or None,
    )
    await get_collection(db, ORGANIZATIONS).put(organization.to_document())
    return organization
