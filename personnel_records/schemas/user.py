"""
Pydantic schemas for profiles and admin user management.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Profile Schemas ---

class ProfileResponse(BaseModel):
    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    avatar_url: str | None

    model_config = {"from_attributes": True}


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile updated successfully"
    user: ProfileResponse


# --- Admin Schemas ---

class UserResponse(BaseModel):
    """A user row as shown on the admin user list."""
    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    avatar_url: str | None
    is_admin: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: list[UserResponse]


class AdminUserUpdate(BaseModel):
    """Admin edit of another account's identity and role."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=3, max_length=50)
    email: str = Field(min_length=5, max_length=255)
    is_admin: bool = Field(default=False, alias="isAdmin")


class AdminUserSummary(BaseModel):
    id: int
    username: str
    email: str
    is_admin: bool

    model_config = {"from_attributes": True}


class AdminUserUpdateResponse(BaseModel):
    message: str = "User updated successfully"
    user: AdminUserSummary


class MessageResponse(BaseModel):
    message: str
