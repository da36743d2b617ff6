"""Module: reminders."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, get_owned_pet, parse_id
from petcare.core.errors import NotFoundError, ValidationError
from petcare.db.models.feeding_reminder import FeedingReminder
from petcare.db.models.pet import Pet
from petcare.schemas.reminders import ReminderCreate, ReminderOut, ReminderUpdate

router = APIRouter()

DEFAULT_LABEL = "Feeding reminder"
DEFAULT_TIME = "08:00"


def _as_reminder_out(r: FeedingReminder) -> ReminderOut:
    return ReminderOut(
        id=str(r.id),
        pet_id=str(r.pet_id),
        label=r.label,
        time=r.time,
        enabled=r.enabled,
    )


@router.get("/{pet_id}/feeding-reminders", response_model=list[ReminderOut], summary="List feeding reminders")
def list_feeding_reminders(
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    reminders = db.execute(
        select(FeedingReminder)
        .where(FeedingReminder.pet_id == pet.id)
        .order_by(FeedingReminder.time, FeedingReminder.id)
    ).scalars().all()
    return [_as_reminder_out(r) for r in reminders]


@router.post("/{pet_id}/feeding-reminders", response_model=ReminderOut, status_code=201, summary="Create feeding reminder")
def create_feeding_reminder(
    payload: ReminderCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    reminder = FeedingReminder(
        pet_id=pet.id,
        label=(payload.label or "").strip() or DEFAULT_LABEL,
        time=payload.time or DEFAULT_TIME,
        enabled=True if payload.enabled is None else payload.enabled,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return _as_reminder_out(reminder)


@router.patch(
    "/{pet_id}/feeding-reminders/{reminder_id}",
    response_model=ReminderOut,
    summary="Update feeding reminder",
)
def update_feeding_reminder(
    reminder_id: str,
    payload: ReminderUpdate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    rid = parse_id(reminder_id, "reminder id")
    reminder = db.execute(
        select(FeedingReminder).where(
            FeedingReminder.id == rid,
            FeedingReminder.pet_id == pet.id,
        )
    ).scalar_one_or_none()
    if not reminder:
        raise NotFoundError("Feeding reminder not found")

    fields = payload.model_fields_set
    if "label" in fields:
        label = (payload.label or "").strip()
        if not label:
            raise ValidationError("Reminder label cannot be empty")
        reminder.label = label
    if "time" in fields:
        if payload.time is None:
            raise ValidationError("Reminder time cannot be empty")
        reminder.time = payload.time
    if "enabled" in fields:
        if payload.enabled is None:
            raise ValidationError("enabled must be true or false")
        reminder.enabled = payload.enabled

    db.commit()
    db.refresh(reminder)
    return _as_reminder_out(reminder)
