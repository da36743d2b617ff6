"""Module: pets.

Request and response bodies for pet profiles and their health records.
"""

import datetime
from typing import Annotated, Literal

from pydantic import Field

from petcare.schemas.common import CamelModel
from petcare.schemas.reminders import TIME_PATTERN

Level = Literal["low", "medium", "high"]
MealTime = Annotated[str, Field(pattern=TIME_PATTERN)]


class PetCreate(CamelModel):
    name: str
    species: str
    age_in_months: int | None = Field(default=None, ge=0)
    breed: str | None = None
    weight_kg: float | None = Field(default=None, ge=0)
    avatar_url: str | None = None


class PetUpdate(CamelModel):
    name: str | None = None
    breed: str | None = None
    age_in_months: int | None = Field(default=None, ge=0)
    weight_kg: float | None = Field(default=None, ge=0)
    avatar_url: str | None = None


class PetOut(CamelModel):
    id: str
    name: str
    species: str
    breed: str | None = None
    age_in_months: int | None = None
    weight_kg: float | None = None
    avatar_url: str | None = None


class VaccineCreate(CamelModel):
    name: str
    date: datetime.date
    clinic: str | None = None
    vet: str | None = None
    notes: str | None = None
    effect: str | None = None
    precautions: str | None = None


class VaccineOut(CamelModel):
    id: str
    name: str
    date: datetime.date
    clinic: str = ""
    vet: str = ""
    notes: str | None = None
    effect: str | None = None
    precautions: str | None = None


class CheckupCreate(CamelModel):
    date: datetime.date
    clinic: str | None = None
    vet: str | None = None
    summary: str | None = None
    weight_kg: float | None = Field(default=None, ge=0)
    details: str | None = None
    report_file_url: str | None = None


class CheckupOut(CamelModel):
    id: str
    date: datetime.date
    clinic: str = ""
    vet: str = ""
    summary: str = ""
    weight_kg: float = 0
    details: str | None = None
    report_file_url: str | None = None


class AllergyCreate(CamelModel):
    allergen: str
    reaction: str | None = None
    severity: Level = "low"
    notes: str | None = None


class AllergyOut(CamelModel):
    id: str
    allergen: str
    reaction: str = ""
    severity: Level
    notes: str | None = None


class FeedingPlanIn(CamelModel):
    food: str = ""
    calories_per_meal: int = Field(default=0, ge=0)
    schedule: list[MealTime] = Field(default_factory=list)
    notes: str | None = None


class FeedingPlanOut(CamelModel):
    food: str = ""
    calories_per_meal: int = 0
    schedule: list[str] = Field(default_factory=list)
    notes: str | None = None


class ExerciseCreate(CamelModel):
    date: datetime.date
    activity: str
    duration_minutes: int = Field(ge=0)
    intensity: Level = "medium"


class ExerciseOut(CamelModel):
    id: str
    date: datetime.date
    activity: str
    duration_minutes: int
    intensity: Level


class PetHealthProfile(CamelModel):
    id: str
    name: str
    species: str
    breed: str
    # Whole years, derived from age in months.
    age: int
    weight_kg: float
    vaccines: list[VaccineOut]
    checkups: list[CheckupOut]
    allergies: list[AllergyOut]
    feeding_plan: FeedingPlanOut
    exercise_records: list[ExerciseOut]
