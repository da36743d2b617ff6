"""Module: pets."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_current_user_id, get_db, get_owned_pet
from petcare.core.errors import ValidationError
from petcare.db.models.allergy_record import AllergyRecord
from petcare.db.models.exercise_record import ExerciseRecord
from petcare.db.models.feeding_plan import FeedingPlan
from petcare.db.models.medical_checkup import MedicalCheckup
from petcare.db.models.pet import SPECIES, Pet
from petcare.db.models.vaccine_record import VaccineRecord
from petcare.schemas.pets import (
    AllergyCreate,
    AllergyOut,
    CheckupCreate,
    CheckupOut,
    ExerciseCreate,
    ExerciseOut,
    FeedingPlanIn,
    FeedingPlanOut,
    PetCreate,
    PetHealthProfile,
    PetOut,
    PetUpdate,
    VaccineCreate,
    VaccineOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RECENT_EXERCISE_LIMIT = 10


# -------------------------
# Helpers
# -------------------------
def _normalize_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned if cleaned else None


def _required(value: str | None, message: str) -> str:
    cleaned = _normalize_optional(value)
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def _float(value) -> float | None:
    return None if value is None else float(value)


def _schedule(raw) -> list[str]:
    return [str(slot) for slot in raw] if isinstance(raw, list) else []


def _as_pet_out(pet: Pet) -> PetOut:
    return PetOut(
        id=str(pet.id),
        name=pet.name,
        species=pet.species,
        breed=pet.breed,
        age_in_months=pet.age_in_months,
        weight_kg=_float(pet.weight_kg),
        avatar_url=pet.avatar_url,
    )


def _as_vaccine_out(v: VaccineRecord) -> VaccineOut:
    return VaccineOut(
        id=str(v.id),
        name=v.name,
        date=v.date,
        clinic=v.clinic or "",
        vet=v.vet or "",
        notes=v.notes,
        effect=v.effect,
        precautions=v.precautions,
    )


def _as_checkup_out(c: MedicalCheckup) -> CheckupOut:
    return CheckupOut(
        id=str(c.id),
        date=c.date,
        clinic=c.clinic or "",
        vet=c.vet or "",
        summary=c.summary or "",
        weight_kg=_float(c.weight_kg) or 0,
        details=c.details,
        report_file_url=c.report_file_url,
    )


def _as_allergy_out(a: AllergyRecord) -> AllergyOut:
    return AllergyOut(
        id=str(a.id),
        allergen=a.allergen,
        reaction=a.reaction or "",
        severity=a.severity,
        notes=a.notes,
    )


def _as_exercise_out(e: ExerciseRecord) -> ExerciseOut:
    return ExerciseOut(
        id=str(e.id),
        date=e.date,
        activity=e.activity,
        duration_minutes=e.duration_minutes,
        intensity=e.intensity,
    )


def _as_feeding_plan_out(plan: FeedingPlan | None) -> FeedingPlanOut:
    if plan is None:
        return FeedingPlanOut()
    return FeedingPlanOut(
        food=plan.food or "",
        calories_per_meal=plan.calories_per_meal or 0,
        schedule=_schedule(plan.schedule),
        notes=plan.notes,
    )


# -------------------------
# Endpoints
# -------------------------

@router.get("", response_model=list[PetOut], summary="List the caller's pets")
def list_pets(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pets = db.execute(
        select(Pet)
        .where(Pet.user_id == user_id)
        .order_by(desc(Pet.created_at), desc(Pet.id))
    ).scalars().all()

    return [_as_pet_out(p) for p in pets]


@router.post("", response_model=PetOut, status_code=201, summary="Create pet profile")
def create_pet(
    payload: PetCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    name = _required(payload.name, "Pet name and species are required")
    species = _required(payload.species, "Pet name and species are required").lower()
    if species not in SPECIES:
        raise ValidationError("Species must be one of: dog, cat, other")

    pet = Pet(
        user_id=user_id,
        name=name,
        species=species,
        breed=_normalize_optional(payload.breed),
        age_in_months=payload.age_in_months,
        weight_kg=payload.weight_kg,
        avatar_url=_normalize_optional(payload.avatar_url),
    )
    db.add(pet)
    db.commit()
    db.refresh(pet)

    logger.info("Created pet id=%s for user id=%s", pet.id, user_id)
    return _as_pet_out(pet)


@router.get("/{pet_id}", response_model=PetOut, summary="Get pet detail")
def get_pet(pet: Pet = Depends(get_owned_pet)):
    return _as_pet_out(pet)


@router.put("/{pet_id}", response_model=PetOut, summary="Update pet details")
def update_pet(
    payload: PetUpdate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    fields = payload.model_fields_set

    if "name" in fields:
        pet.name = _required(payload.name, "Pet name cannot be empty")
    if "breed" in fields:
        pet.breed = _normalize_optional(payload.breed)
    if "age_in_months" in fields:
        pet.age_in_months = payload.age_in_months
    if "weight_kg" in fields:
        pet.weight_kg = payload.weight_kg
    if "avatar_url" in fields:
        pet.avatar_url = _normalize_optional(payload.avatar_url)

    db.commit()
    db.refresh(pet)
    return _as_pet_out(pet)


@router.get("/{pet_id}/health", response_model=PetHealthProfile, summary="Get pet health profile")
def get_pet_health_profile(
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    vaccines = db.execute(
        select(VaccineRecord)
        .where(VaccineRecord.pet_id == pet.id)
        .order_by(desc(VaccineRecord.date), desc(VaccineRecord.id))
    ).scalars().all()

    checkups = db.execute(
        select(MedicalCheckup)
        .where(MedicalCheckup.pet_id == pet.id)
        .order_by(desc(MedicalCheckup.date), desc(MedicalCheckup.id))
    ).scalars().all()

    allergies = db.execute(
        select(AllergyRecord)
        .where(AllergyRecord.pet_id == pet.id)
        .order_by(AllergyRecord.id)
    ).scalars().all()

    plan = db.execute(
        select(FeedingPlan).where(FeedingPlan.pet_id == pet.id)
    ).scalar_one_or_none()

    exercises = db.execute(
        select(ExerciseRecord)
        .where(ExerciseRecord.pet_id == pet.id)
        .order_by(desc(ExerciseRecord.date), desc(ExerciseRecord.id))
        .limit(RECENT_EXERCISE_LIMIT)
    ).scalars().all()

    return PetHealthProfile(
        id=str(pet.id),
        name=pet.name,
        species=pet.species,
        breed=pet.breed or "",
        age=(pet.age_in_months or 0) // 12,
        weight_kg=_float(pet.weight_kg) or 0,
        vaccines=[_as_vaccine_out(v) for v in vaccines],
        checkups=[_as_checkup_out(c) for c in checkups],
        allergies=[_as_allergy_out(a) for a in allergies],
        feeding_plan=_as_feeding_plan_out(plan),
        exercise_records=[_as_exercise_out(e) for e in exercises],
    )


@router.post("/{pet_id}/vaccines", response_model=VaccineOut, status_code=201, summary="Add vaccine record")
def add_vaccine(
    payload: VaccineCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    record = VaccineRecord(
        pet_id=pet.id,
        name=_required(payload.name, "Vaccine name is required"),
        date=payload.date,
        clinic=_normalize_optional(payload.clinic),
        vet=_normalize_optional(payload.vet),
        notes=_normalize_optional(payload.notes),
        effect=_normalize_optional(payload.effect),
        precautions=_normalize_optional(payload.precautions),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return _as_vaccine_out(record)


@router.post("/{pet_id}/checkups", response_model=CheckupOut, status_code=201, summary="Add medical checkup")
def add_checkup(
    payload: CheckupCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    record = MedicalCheckup(
        pet_id=pet.id,
        date=payload.date,
        clinic=_normalize_optional(payload.clinic),
        vet=_normalize_optional(payload.vet),
        summary=payload.summary or "",
        weight_kg=payload.weight_kg,
        details=_normalize_optional(payload.details),
        report_file_url=_normalize_optional(payload.report_file_url),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return _as_checkup_out(record)


@router.post("/{pet_id}/allergies", response_model=AllergyOut, status_code=201, summary="Add allergy record")
def add_allergy(
    payload: AllergyCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    record = AllergyRecord(
        pet_id=pet.id,
        allergen=_required(payload.allergen, "Allergen is required"),
        reaction=payload.reaction or "",
        severity=payload.severity,
        notes=_normalize_optional(payload.notes),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return _as_allergy_out(record)


@router.put("/{pet_id}/feeding-plan", response_model=FeedingPlanOut, summary="Replace feeding plan")
def update_feeding_plan(
    payload: FeedingPlanIn,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    plan = db.execute(
        select(FeedingPlan).where(FeedingPlan.pet_id == pet.id)
    ).scalar_one_or_none()
    if plan is None:
        plan = FeedingPlan(pet_id=pet.id)
        db.add(plan)

    plan.food = payload.food or ""
    plan.calories_per_meal = payload.calories_per_meal
    plan.schedule = list(payload.schedule)
    plan.notes = _normalize_optional(payload.notes)

    db.commit()
    db.refresh(plan)
    return _as_feeding_plan_out(plan)


@router.post("/{pet_id}/exercises", response_model=ExerciseOut, status_code=201, summary="Add exercise record")
def add_exercise(
    payload: ExerciseCreate,
    pet: Pet = Depends(get_owned_pet),
    db: Session = Depends(get_db),
):
    record = ExerciseRecord(
        pet_id=pet.id,
        date=payload.date,
        activity=_required(payload.activity, "Activity is required"),
        duration_minutes=payload.duration_minutes,
        intensity=payload.intensity,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return _as_exercise_out(record)
