"""User and organization documents."""
from typing import Optional
from portal.models.base import DocumentModel
import enum


class UserRole(str, enum.Enum):
    """Portal roles."""
    ADMIN = "admin"
    CLIENT = "client"
    SUPERUSER = "superuser"


class User(DocumentModel):
    """Portal user, keyed by username."""

    id: str
    username: str
    name: str
    email: str
    role: UserRole
    password_hash: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None

    def __repr__(self):
        return f"<User(id={self.id}, role={self.role.value})>"


class Organization(DocumentModel):
    """Client organization, keyed by slug."""

    id: str
    name: str
    github_repository: Optional[str] = None

    def __repr__(self):
        return f"<Organization(id={self.id}, name={self.name})>"
