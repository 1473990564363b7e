"""Pydantic schemas for users and authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from analise_tributaria.db.models.user import User


class UserResponse(BaseModel):
    """Public user representation."""

    id: int
    username: str
    is_admin: bool

    @classmethod
    def from_model(cls, user: User) -> UserResponse:
        return cls(id=user.id, username=user.username, is_admin=user.is_admin)


class CreateUserRequest(BaseModel):
    username: str = Field(max_length=100)
    password: str = Field(max_length=128)
    is_admin: bool = False


class LoginRequest(BaseModel):
    username: str = Field(max_length=100)
    password: str = Field(max_length=128)


class LoginResponse(BaseModel):
    """Bearer token plus the identity it represents."""

    token: str
    user: UserResponse
