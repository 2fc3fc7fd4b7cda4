"""Pydantic schemas for registration, login, and user views.

Learn: Input schemas normalize before validating: usernames and emails
are trimmed, emails lowercased. UserRead is the only outward shape of a
user, and it has no password field at all.
"""

import uuid

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserRead(BaseModel):
    id: uuid.UUID
    username: str
    email: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Register/login response — token plus the user it was issued for."""
    message: str
    token: str
    user: UserRead
