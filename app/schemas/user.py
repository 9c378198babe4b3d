"""
Pydantic schemas for users, registration and login.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration (never grants admin)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users."""
    is_admin: bool = False


class UserLoginRequest(BaseModel):
    """Request schema for user login."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(BaseModel):
    """Partial user update; username and admin flag cannot change here."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None

    @field_validator("password", "first_name", "last_name", "email", mode="before")
    @classmethod
    def not_null(cls, v: Any, info: ValidationInfo) -> Any:
        # Omit a field to leave it unchanged
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserEnvelope(BaseModel):
    user: UserResponse


class UserCreatedResponse(BaseModel):
    user: UserResponse
    token: str


class UserListEnvelope(BaseModel):
    users: List[UserResponse]


class UserDeletedResponse(BaseModel):
    deleted: str
