"""Request and response schemas for signup, login and the profile."""

from datetime import datetime
from re import search
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from app.configs.settings import MAX_USERNAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=MIN_USERNAME_LENGTH,
        max_length=MAX_USERNAME_LENGTH,
        pattern=r"^[a-zA-Z0-9_]+$",
    ),
]


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    username: str
    user_id: UUID
    jti: str
    token_type: str = "access"


class SignupRequest(BaseModel):
    """Body of ``POST /auth/signup``."""

    email: EmailStr = Field(examples=["ada@example.com"])
    username: Username = Field(examples=["ada_l"])
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, examples=["Sup3rSecret"])

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        """Require at least one lowercase letter, one uppercase letter and one digit."""
        if not (search(r"[a-z]", value) and search(r"[A-Z]", value) and search(r"\d", value)):
            mssg = "Password must contain at least one uppercase letter, one lowercase letter, and one number"
            raise ValueError(mssg)
        return value


class LoginRequest(BaseModel):
    """Body of ``POST /auth/login``."""

    email: EmailStr
    password: str = Field(min_length=1)


class AuthUser(BaseModel):
    id: UUID
    email: str
    username: str


class AuthResponse(BaseModel):
    """Signup and login response: the user and a bearer token."""

    message: str
    user: AuthUser
    token: str


class ProfileUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    username: str
    created_at: datetime = Field(alias="createdAt")
    post_count: int = Field(alias="postCount")


class ProfileResponse(BaseModel):
    user: ProfileUser
