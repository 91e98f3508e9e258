"""Auth form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from ...schemas import CamelModel


class LoginForm(CamelModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=256)


class RegisterForm(LoginForm):
    name: Optional[str] = Field(default=None, max_length=120)
    email: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        if value and "@" not in value:
            raise ValueError("Please provide a valid email address.")
        return value or None


__all__ = ["LoginForm", "RegisterForm"]
