"""Module: medical_checkup."""

import datetime

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base


class MedicalCheckup(Base):
    __tablename__ = "medical_checkups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    clinic: Mapped[str] = mapped_column(String(200), nullable=True)
    vet: Mapped[str] = mapped_column(String(100), nullable=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    weight_kg: Mapped[float] = mapped_column(Numeric(5, 2), nullable=True)
    details: Mapped[str] = mapped_column(Text, nullable=True)
    report_file_url: Mapped[str] = mapped_column(String(500), nullable=True)
