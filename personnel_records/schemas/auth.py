"""
Pydantic schemas for login and account registration.

Request bodies keep the camelCase keys the web client sends
(isAdmin); Python code uses the snake_case field names.
"""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    """Admin-only request to create a staff account."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=3, max_length=50)
    email: str = Field(min_length=5, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    is_admin: bool = Field(default=False, alias="isAdmin")


class UserSummary(BaseModel):
    """The slice of a user returned by login."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    is_admin: bool = Field(alias="isAdmin")


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: UserSummary


class RegisteredUser(BaseModel):
    id: int
    username: str
    email: str
    is_admin: bool

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    message: str = "User created successfully"
    user: RegisteredUser
