"""Module: reminders."""

from pydantic import Field

from petcare.schemas.common import CamelModel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ReminderCreate(CamelModel):
    label: str | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    enabled: bool | None = None


class ReminderUpdate(CamelModel):
    label: str | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    enabled: bool | None = None


class ReminderOut(CamelModel):
    id: str
    pet_id: str
    label: str
    time: str
    enabled: bool
