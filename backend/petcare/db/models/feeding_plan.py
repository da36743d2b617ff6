"""Module: feeding_plan."""

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base


# One plan per pet; PUT replaces it wholesale.
class FeedingPlan(Base):
    __tablename__ = "feeding_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    food: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    calories_per_meal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Meal times as "HH:MM" strings.
    schedule: Mapped[list] = mapped_column(JSON, nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=True)
