# app/schemas/auth.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field

from app.schemas.user import UserRead, UserType, strip_required


class RegisterRequest(SQLModel):
    """
    Sign-up payload.

    Password strength is checked by the service so the error message
    matches the login/reset flows.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(max_length=128)
    name: str = Field(max_length=100)
    city: str | None = Field(default=None, max_length=100)
    user_type: UserType | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshTokenRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    refresh_token: str = Field(min_length=1)


class VerifyEmailRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    code: str = Field(regex=r"^\d{6}$", description="6-digit code from the email")


class ResendVerificationRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class TokenRead(SQLModel):
    access_token: str
    refresh_token: str
    token_type: Literal["Bearer"] = "Bearer"
    expires_at: datetime
    refresh_expires_at: datetime


class AuthRead(SQLModel):
    """Returned by register / login."""

    user: UserRead
    tokens: TokenRead


class LogoutAllRead(SQLModel):
    revoked_sessions: int
