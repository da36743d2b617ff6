"""Module: habits.

Daily habit check-ins and the series derived from them.

The chart contract is a fixed 7-day window ending on a reference day,
oldest point first, with missing days zero-filled. Entries are read with a
14-day margin; only the 7-day output is guaranteed.
"""

import json
import logging
from datetime import date, datetime, timedelta
from typing import Iterable

from sqlalchemy import desc, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from petcare.core.errors import StorageError
from petcare.db.models.habit_entry import HabitEntry
from petcare.schemas.habits import (
    HabitAnalytics,
    HabitEntryCreate,
    HabitEntryOut,
    HealthTrendPoint,
)

logger = logging.getLogger(__name__)

TREND_DAYS = 7
TREND_FETCH_DAYS = 14
DEFAULT_HISTORY_LIMIT = 5
MAX_HISTORY_LIMIT = 30
# Longest streak we bother counting back.
STREAK_LOOKBACK_DAYS = 90
EXERCISE_TARGET_MINUTES = 30

_CONFLICT_KEYS = ("pet_id", "entry_date")
_UPDATABLE_COLUMNS = (
    "feeding_grams",
    "exercise_minutes",
    "weight_kg",
    "completed_tasks",
    "notes",
    "updated_at",
)


def clamp_history_limit(limit: int | None) -> int:
    if not limit or limit < 1:
        return DEFAULT_HISTORY_LIMIT
    return min(limit, MAX_HISTORY_LIMIT)


def decode_completed_tasks(raw) -> list[str]:
    """Turn the stored task list back into task identifiers."""
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if not isinstance(raw, list):
        return []
    return [str(task) for task in raw]


def _number(value) -> float | None:
    return None if value is None else float(value)


def entry_to_out(entry: HabitEntry) -> HabitEntryOut:
    return HabitEntryOut(
        id=str(entry.id),
        date=entry.entry_date.isoformat(),
        feeding_grams=entry.feeding_grams,
        exercise_minutes=entry.exercise_minutes,
        weight_kg=_number(entry.weight_kg),
        completed_tasks=decode_completed_tasks(entry.completed_tasks),
        notes=entry.notes,
    )


def _upsert_statement(dialect_name: str, values: dict):
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(HabitEntry).values(**values)
        return stmt.on_duplicate_key_update(
            {col: stmt.inserted[col] for col in _UPDATABLE_COLUMNS}
        )

    if dialect_name == "postgresql":
        stmt = pg_insert(HabitEntry).values(**values)
    elif dialect_name == "sqlite":
        stmt = sqlite_insert(HabitEntry).values(**values)
    else:
        raise StorageError(f"Habit check-ins are not supported on {dialect_name}")

    return stmt.on_conflict_do_update(
        index_elements=list(_CONFLICT_KEYS),
        set_={col: stmt.excluded[col] for col in _UPDATABLE_COLUMNS},
    )


def upsert_habit_entry(db: Session, pet_id: int, payload: HabitEntryCreate) -> HabitEntry:
    """
    Write the single (pet, day) entry, overwriting any previous check-in.

    Relies on the database's own insert-or-update so two concurrent check-ins
    for the same day end up as one row.
    """
    now = datetime.utcnow()
    values = {
        "pet_id": pet_id,
        "entry_date": payload.entry_date,
        "feeding_grams": payload.feeding_grams,
        "exercise_minutes": payload.exercise_minutes,
        "weight_kg": payload.weight_kg,
        "completed_tasks": list(payload.completed_tasks),
        "notes": payload.notes,
        "created_at": now,
        "updated_at": now,
    }

    db.execute(_upsert_statement(db.get_bind().dialect.name, values))
    db.commit()

    entry = db.execute(
        select(HabitEntry)
        .where(HabitEntry.pet_id == pet_id, HabitEntry.entry_date == payload.entry_date)
        .execution_options(populate_existing=True)
    ).scalar_one()
    logger.info("Habit entry saved pet_id=%s date=%s", pet_id, payload.date)
    return entry


def list_recent_entries(db: Session, pet_id: int, limit: int, end_date: date | None = None) -> list[HabitEntry]:
    stmt = select(HabitEntry).where(HabitEntry.pet_id == pet_id)
    if end_date is not None:
        stmt = stmt.where(HabitEntry.entry_date <= end_date)
    stmt = stmt.order_by(desc(HabitEntry.entry_date)).limit(limit)
    return list(db.execute(stmt).scalars().all())


def build_trend_points(entries: Iterable[HabitEntry], end_date: date, days: int = TREND_DAYS) -> list[HealthTrendPoint]:
    by_date = {entry.entry_date.isoformat(): entry for entry in entries}

    points: list[HealthTrendPoint] = []
    for offset in range(days - 1, -1, -1):
        day = (end_date - timedelta(days=offset)).isoformat()
        entry = by_date.get(day)
        if entry is None:
            points.append(HealthTrendPoint(date=day))
            continue
        points.append(
            HealthTrendPoint(
                date=day,
                feeding_grams=entry.feeding_grams or 0,
                exercise_minutes=entry.exercise_minutes or 0,
                weight_kg=_number(entry.weight_kg) or 0,
            )
        )
    return points


def get_trend_points(db: Session, pet_id: int, end_date: date) -> list[HealthTrendPoint]:
    entries = list_recent_entries(db, pet_id, TREND_FETCH_DAYS, end_date=end_date)
    return build_trend_points(entries, end_date)


def _streak(dates: set[date], end_date: date) -> int:
    day = end_date if end_date in dates else end_date - timedelta(days=1)
    streak = 0
    while day in dates:
        streak += 1
        day -= timedelta(days=1)
    return streak


def _insights(streak: int, consistency: int, companionship: int, weight_change: float | None, has_entries: bool) -> list[str]:
    if not has_entries:
        return ["No check-ins in the last 7 days. Log today's care to start tracking."]

    insights: list[str] = []
    if streak >= 7:
        insights.append(f"{streak}-day check-in streak. Keep the routine going.")
    if consistency < 50:
        insights.append("Fewer than half of the last 7 days have completed tasks. Feeding reminders can help.")
    elif consistency >= 80:
        insights.append("Daily care tasks were completed on most days this week.")
    if companionship < 50:
        insights.append(f"Exercise averaged well under {EXERCISE_TARGET_MINUTES} minutes a day. Try adding a short walk.")
    elif companionship >= 100:
        insights.append("Exercise time met the daily target all week.")
    if weight_change is not None and abs(weight_change) >= 0.2:
        direction = "up" if weight_change > 0 else "down"
        insights.append(f"Weight is {direction} {abs(weight_change):.2f} kg over the last week.")
    return insights


def compute_habit_analytics(pet_id: int, entries: Iterable[HabitEntry], end_date: date) -> HabitAnalytics:
    entries = list(entries)
    window_start = end_date - timedelta(days=TREND_DAYS - 1)
    window = sorted(
        (e for e in entries if window_start <= e.entry_date <= end_date),
        key=lambda e: e.entry_date,
    )

    completed_days = sum(1 for e in window if decode_completed_tasks(e.completed_tasks))
    consistency = round(100 * completed_days / TREND_DAYS)

    average_minutes = sum(e.exercise_minutes or 0 for e in window) / TREND_DAYS
    companionship = min(100, round(100 * average_minutes / EXERCISE_TARGET_MINUTES))

    streak = _streak({e.entry_date for e in entries if e.entry_date <= end_date}, end_date)

    weights = [float(e.weight_kg) for e in window if e.weight_kg is not None]
    weight_change = weights[-1] - weights[0] if len(weights) >= 2 else None

    return HabitAnalytics(
        pet_id=str(pet_id),
        companionship_score=companionship,
        consistency_score=consistency,
        streak_days=streak,
        insights=_insights(streak, consistency, companionship, weight_change, bool(window)),
    )


def get_habit_analytics(db: Session, pet_id: int, end_date: date) -> HabitAnalytics:
    entries = list_recent_entries(db, pet_id, STREAK_LOOKBACK_DAYS, end_date=end_date)
    return compute_habit_analytics(pet_id, entries, end_date)
