"""Module: auth."""

from datetime import datetime

from petcare.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str


class LoginRequest(CamelModel):
    email: str
    password: str


class UserPayload(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    user: UserPayload
    token: str
