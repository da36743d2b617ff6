"""Module: seed_data."""

import random
from datetime import date, timedelta

from faker import Faker
from sqlalchemy import select

from petcare.core.config import Settings
from petcare.core.security import hash_password
from petcare.db.init_db import init_db
from petcare.db.models.allergy_record import AllergyRecord
from petcare.db.models.community_answer import CommunityAnswer
from petcare.db.models.community_post import CommunityPost, encode_tags
from petcare.db.models.community_question import CommunityQuestion
from petcare.db.models.exercise_record import ExerciseRecord
from petcare.db.models.feeding_plan import FeedingPlan
from petcare.db.models.feeding_reminder import FeedingReminder
from petcare.db.models.habit_entry import HabitEntry
from petcare.db.models.medical_checkup import MedicalCheckup
from petcare.db.models.pet import Pet
from petcare.db.models.user import User
from petcare.db.models.vaccine_record import VaccineRecord
from petcare.db.session import Database

fake = Faker()

DEMO_EMAIL = "demo@petcare.local"
DEMO_PASSWORD = "petcare123"

DOG_BREEDS = ["Corgi", "Shiba Inu", "Golden Retriever", "Border Collie", "Beagle"]
ACTIVITIES = [("Jogging", "medium"), ("Frisbee", "high"), ("Walk", "low")]
TASKS = ["feeding", "walking", "grooming", "training"]


def seed_users(session, n: int = 5) -> list[User]:
    users = [User(name="Demo Owner", email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD))]
    for _ in range(n - 1):
        users.append(User(
            name=fake.name(),
            email=fake.unique.email().lower(),
            password_hash=hash_password(fake.password(length=12)),
        ))
    session.add_all(users)
    session.commit()
    return users


def seed_pet_with_records(session, owner: User, today: date) -> Pet:
    pet = Pet(
        user_id=owner.id,
        name="Coco",
        species="dog",
        breed=random.choice(DOG_BREEDS),
        age_in_months=36,
        weight_kg=11.2,
    )
    session.add(pet)
    session.flush()

    session.add_all([
        VaccineRecord(pet_id=pet.id, name="Rabies", date=today - timedelta(days=38),
                      clinic="City Pet Hospital", vet=fake.name(), notes="Booster, mild reaction"),
        VaccineRecord(pet_id=pet.id, name="DHPPi", date=today - timedelta(days=214),
                      clinic="City Pet Hospital", vet=fake.name()),
        MedicalCheckup(pet_id=pet.id, date=today - timedelta(days=38), clinic="City Pet Hospital",
                       vet=fake.name(), summary="Healthy overall, keep an eye on weight", weight_kg=11.2),
        AllergyRecord(pet_id=pet.id, allergen="Chicken", reaction="Itchy skin", severity="medium",
                      notes="Improved after switching food"),
        FeedingPlan(pet_id=pet.id, food="Hypoallergenic salmon formula", calories_per_meal=320,
                    schedule=["07:30", "12:30", "18:30"], notes="Add probiotics"),
    ])

    for offset, (activity, intensity) in enumerate(ACTIVITIES):
        session.add(ExerciseRecord(
            pet_id=pet.id,
            date=today - timedelta(days=offset),
            activity=activity,
            duration_minutes=random.randint(20, 45),
            intensity=intensity,
        ))

    for label, time, enabled in (("Breakfast", "07:30", True), ("Lunch", "12:30", False), ("Dinner", "18:30", True)):
        session.add(FeedingReminder(pet_id=pet.id, label=label, time=time, enabled=enabled))

    session.commit()
    return pet


def seed_habit_entries(session, pet: Pet, today: date, days: int = 14) -> int:
    # Leave an occasional gap so the zero-filled trend points show up.
    weight = 11.4
    n = 0
    for offset in range(days - 1, -1, -1):
        if offset and random.random() < 0.15:
            continue
        weight = round(weight - random.uniform(0, 0.05), 2)
        session.add(HabitEntry(
            pet_id=pet.id,
            entry_date=today - timedelta(days=offset),
            feeding_grams=random.choice([300, 310, 320, 330]),
            exercise_minutes=random.randint(20, 45),
            weight_kg=weight,
            completed_tasks=random.sample(TASKS, k=random.randint(1, 3)),
        ))
        n += 1
    session.commit()
    return n


def seed_community(session, users: list[User]) -> tuple[int, int]:
    posts = []
    for _ in range(12):
        posts.append(CommunityPost(
            author_id=random.choice(users).id,
            content=fake.paragraph(nb_sentences=2),
            tags=encode_tags(random.sample(["daily", "qa", "rescue"], k=random.randint(1, 2))),
            likes=random.randint(0, 250),
            comments=random.randint(0, 40),
        ))
    session.add_all(posts)

    question = CommunityQuestion(
        author_id=users[0].id,
        question="What protein percentage works best for an active husky in summer?",
        tags=encode_tags(["qa"]),
    )
    session.add(question)
    session.flush()
    session.add(CommunityAnswer(
        question_id=question.id,
        author_id=users[-1].id,
        text="Around 24-26% protein with an omega-3 topper has worked well for us.",
        is_accepted=True,
    ))
    session.commit()
    return len(posts), 1


if __name__ == "__main__":
    # Usage: python -m petcare.scripts.seed_data (reads DATABASE_URL like the API)
    database = Database(Settings())
    init_db(database)
    session = database.SessionLocal()
    try:
        if session.execute(select(User.id).where(User.email == DEMO_EMAIL)).first():
            print(f"Demo data already present for {DEMO_EMAIL}; nothing to do.")
        else:
            today = date.today()

            print("Seeding users...")
            users = seed_users(session)

            print("Seeding demo pet and health records...")
            pet = seed_pet_with_records(session, users[0], today)

            print("Seeding habit entries...")
            habit_n = seed_habit_entries(session, pet, today)

            print("Seeding community content...")
            post_n, question_n = seed_community(session, users)

            print(f"Done. habit_entries={habit_n}, posts={post_n}, questions={question_n}")
            print(f"Log in with {DEMO_EMAIL} / {DEMO_PASSWORD}")
    finally:
        session.close()
        database.dispose()
