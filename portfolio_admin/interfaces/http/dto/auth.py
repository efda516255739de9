from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

_USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


def _check_username(value: str) -> str:
    if not re.match(_USERNAME_PATTERN, value):
        raise PydanticCustomError(
            "username_invalid_chars",
            "Username can only contain letters, numbers, and underscores",
            {"pattern": _USERNAME_PATTERN},
        )
    return value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=3, max_length=20)
    password: str = Field(min_length=1, max_length=100)  # No strength check on login
    remember_me: bool = False

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        # Length limits apply to the trimmed name
        return value.strip() if isinstance(value, str) else value

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value)


class ChangePasswordRequestDTO(BaseModel):
    current_password: str = Field(min_length=1, max_length=100)
    new_password: str = Field(min_length=6, max_length=100)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        if value.strip() != value or not value.strip():
            raise PydanticCustomError(
                "password_whitespace",
                "Password must not start or end with whitespace",
                {},
            )
        return value


class UserDTO(BaseModel):
    id: str
    username: str
    role: str
    permissions: list[str] = Field(default_factory=list)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    user: UserDTO | None = None
