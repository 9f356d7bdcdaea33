"""Reminder configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReminderType(str, Enum):
    """The fixed set of reminder slots."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACKS = "Snacks"
    WATER = "Water"


class Reminder(BaseModel):
    """A single reminder slot."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class ReminderSettings(BaseModel):
    """Exactly one reminder per type."""

    model_config = ConfigDict(frozen=True)

    breakfast: Reminder = Reminder(time="08:00")
    lunch: Reminder = Reminder(time="12:30")
    dinner: Reminder = Reminder(time="18:30")
    snacks: Reminder = Reminder(time="15:00")
    water: Reminder = Reminder(time="10:00")

    def get(self, reminder_type: ReminderType) -> Reminder:
        """Return the reminder configured for a type."""
        return getattr(self, reminder_type.name.lower())

    def items(self) -> list[tuple[ReminderType, Reminder]]:
        """Return (type, reminder) pairs in declaration order."""
        return [
            (reminder_type, self.get(reminder_type)) for reminder_type in ReminderType
        ]
