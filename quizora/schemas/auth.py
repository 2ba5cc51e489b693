"""
Auth request/response schemas.
"""
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from quizora.schemas.common import CamelModel


def _bcrypt_length(v: str) -> str:
    if len(v.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes (bcrypt limit)")
    return v


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: str | None = Field(default=None, max_length=50)

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _bcrypt_length(v)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _bcrypt_length(v)


class UserResponse(CamelModel):
    id: UUID
    name: str
    email: str
    role: str


class AuthResponse(UserResponse):
    token: str
