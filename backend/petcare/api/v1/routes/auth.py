import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_current_user_id, get_db, get_settings
from petcare.core.config import Settings
from petcare.core.errors import AuthError, ConflictError, ValidationError
from petcare.core.security import create_access_token, hash_password, verify_password
from petcare.db.models.user import User
from petcare.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPayload

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _as_user_payload(user: User) -> UserPayload:
    return UserPayload(
        id=str(user.id),
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    name = payload.name.strip()
    normalized_email = _normalize_email(payload.email)
    if not name or not normalized_email or not payload.password:
        raise ValidationError("Please fill in all required fields")
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    exists = db.execute(select(User.id).where(func.lower(User.email) == normalized_email)).first()
    if exists:
        raise ConflictError("Email already registered, please log in instead")

    user = User(
        name=name,
        email=normalized_email,
        password_hash=hash_password(payload.password, settings.password_iterations),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise ConflictError("Email already registered, please log in instead")
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return AuthResponse(
        user=_as_user_payload(user),
        token=create_access_token(user.id, settings),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    normalized_email = _normalize_email(payload.email)
    if not normalized_email or not payload.password:
        raise ValidationError("Please enter your email and password")

    user = db.execute(
        select(User).where(func.lower(User.email) == normalized_email)
    ).scalar_one_or_none()

    if not user or not verify_password(payload.password, user.password_hash):
        raise AuthError("Invalid email or password")

    return AuthResponse(
        user=_as_user_payload(user),
        token=create_access_token(user.id, settings),
    )


@router.get("/me", response_model=UserPayload)
def me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if not user:
        raise AuthError("User not found")

    return _as_user_payload(user)
