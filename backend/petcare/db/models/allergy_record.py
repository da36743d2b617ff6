"""Module: allergy_record."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base


class AllergyRecord(Base):
    __tablename__ = "allergy_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    allergen: Mapped[str] = mapped_column(String(100), nullable=False)
    reaction: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    severity: Mapped[str] = mapped_column(String(10), nullable=False, default="low")
    notes: Mapped[str] = mapped_column(Text, nullable=True)
