"""Module: deps."""

from typing import Generator

import jwt
from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.core.config import Settings
from petcare.core.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from petcare.core.security import decode_access_token
from petcare.db.models.pet import Pet
from petcare.db.session import Database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


# Dependency provider: one DB session per request lifecycle.
def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    yield from database.session()


def parse_id(value: str, field_name: str = "id") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")


def _get_token_value(authorization: str | None) -> str:
    if not authorization:
        raise AuthError("Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthError("Invalid Authorization header")

    return parts[1].strip()


def get_current_user_id(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> int:
    token = _get_token_value(authorization)
    try:
        return decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")


def get_owned_pet(
    pet_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Pet:
    """Resolve the path's pet and make sure the caller owns it."""
    pid = parse_id(pet_id, "pet id")

    pet = db.execute(select(Pet).where(Pet.id == pid)).scalar_one_or_none()
    if not pet:
        raise NotFoundError("Pet not found")
    if pet.user_id != user_id:
        raise ForbiddenError("You do not have access to this pet")

    return pet
