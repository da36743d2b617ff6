"""Module: habits."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, get_owned_pet
from petcare.core.errors import ValidationError
from petcare.db.models.pet import Pet
from petcare.schemas.habits import HabitAnalytics, HabitEntryCreate, HabitEntryOut, HealthTrendReport
from petcare.services import habits as habit_service

router = APIRouter()


def _reference_day(end_date: str | None) -> date:
    if not end_date:
        return date.today()
    try:
        return date.fromisoformat(end_date)
    except ValueError:
        raise ValidationError("endDate must be formatted as YYYY-MM-DD")


@router.post("/{pet_id}/habits", response_model=HabitEntryOut, status_code=201, summary="Record daily check-in")
def record_habit_entry(
    payload: HabitEntryCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    entry = habit_service.upsert_habit_entry(db, pet.id, payload)
    return habit_service.entry_to_out(entry)


@router.get("/{pet_id}/habits", response_model=list[HabitEntryOut], summary="Recent check-ins, newest first")
def list_habit_entries(
    limit: int = Query(default=habit_service.DEFAULT_HISTORY_LIMIT),
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    entries = habit_service.list_recent_entries(db, pet.id, habit_service.clamp_history_limit(limit))
    return [habit_service.entry_to_out(e) for e in entries]


@router.get("/{pet_id}/health/trends", response_model=HealthTrendReport, summary="7-day health trend")
def get_health_trends(
    end_date: str | None = Query(default=None, alias="endDate"),
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    points = habit_service.get_trend_points(db, pet.id, _reference_day(end_date))
    return HealthTrendReport(pet_id=str(pet.id), points=points)


@router.get("/{pet_id}/habit-analytics", response_model=HabitAnalytics, summary="Habit scores and insights")
def get_habit_analytics(
    end_date: str | None = Query(default=None, alias="endDate"),
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    return habit_service.get_habit_analytics(db, pet.id, _reference_day(end_date))
