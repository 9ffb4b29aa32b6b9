"""User and organization schemas."""
from typing import Optional
from pydantic import EmailStr
from portal.models.base import DocumentModel
from portal.models.user import Organization, User, UserRole


class UserUpsert(DocumentModel):
    """Schema for creating or updating a user. An id means "update"."""
    id: Optional[str] = None
    username: str = ""
    name: str = ""
    email: Optional[EmailStr] = None
    password: str = ""
    role: Optional[UserRole] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None


class UserResponse(DocumentModel):
    """User information response, without credentials."""
    id: str
    username: str
    name: str
    email: str
    role: UserRole
    company: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))


class OrganizationUpsert(DocumentModel):
    """Schema for creating or updating an organization."""
    id: str = ""
    name: str = ""
    github_repository: Optional[str] = None


class UserActionResult(DocumentModel):
    """Outcome of a user action."""
    success: bool
    user: Optional[UserResponse] = None
    error: Optional[str] = None


class OrganizationActionResult(DocumentModel):
    """Outcome of an organization action."""
    success: bool
    organization: Optional[Organization] = None
    error: Optional[str] = None
