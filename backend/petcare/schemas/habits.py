"""Module: habits."""

import datetime
import math
import re

from pydantic import Field, field_validator

from petcare.schemas.common import CamelModel

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Bounds of the Integer and Numeric(5, 2) columns that store the metrics.
MAX_WHOLE_METRIC = 2_147_483_647
MAX_WEIGHT_KG = 999.99


def _as_number(value) -> float | None:
    # Only real numbers count; strings, booleans and NaN/inf become null.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class HabitEntryCreate(CamelModel):
    date: str
    completed_tasks: list[str] = Field(default_factory=list)
    feeding_grams: int | None = None
    exercise_minutes: int | None = None
    weight_kg: float | None = None
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def _calendar_date(cls, value: str) -> str:
        value = value.strip()
        if not DATE_PATTERN.match(value):
            raise ValueError("date must be formatted as YYYY-MM-DD")
        # Rejects impossible days such as 2024-02-30.
        datetime.date.fromisoformat(value)
        return value

    @field_validator("completed_tasks", mode="before")
    @classmethod
    def _tasks_or_empty(cls, value):
        return [] if value is None else value

    @field_validator("feeding_grams", "exercise_minutes", mode="before")
    @classmethod
    def _whole_number_or_none(cls, value):
        number = _as_number(value)
        if number is None:
            return None
        whole = int(round(number))
        return whole if 0 <= whole <= MAX_WHOLE_METRIC else None

    @field_validator("weight_kg", mode="before")
    @classmethod
    def _weight_or_none(cls, value):
        number = _as_number(value)
        if number is None:
            return None
        weight = round(float(number), 2)
        return weight if 0 <= weight <= MAX_WEIGHT_KG else None

    @property
    def entry_date(self) -> datetime.date:
        return datetime.date.fromisoformat(self.date)


class HabitEntryOut(CamelModel):
    id: str
    date: str
    feeding_grams: int | None = None
    exercise_minutes: int | None = None
    weight_kg: float | None = None
    completed_tasks: list[str] = Field(default_factory=list)
    notes: str | None = None


class HealthTrendPoint(CamelModel):
    date: str
    feeding_grams: int = 0
    exercise_minutes: int = 0
    weight_kg: float = 0


class HealthTrendReport(CamelModel):
    pet_id: str
    points: list[HealthTrendPoint]


class HabitAnalytics(CamelModel):
    pet_id: str
    companionship_score: int
    consistency_score: int
    streak_days: int
    insights: list[str]
