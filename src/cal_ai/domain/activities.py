"""Domain models for exercise logging."""

import datetime

from pydantic import BaseModel, ConfigDict


class Activity(BaseModel):
    """A logged activity with calories burned fixed at log time."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    duration: int
    calories_burned: float
    date: datetime.date


class CustomActivity(BaseModel):
    """Activity option with its MET intensity."""

    model_config = ConfigDict(frozen=True)

    type: str
    emoji: str
    met: float


DEFAULT_ACTIVITIES: tuple[CustomActivity, ...] = (
    CustomActivity(type="Running", emoji="🏃", met=9.8),
    CustomActivity(type="Walking", emoji="🚶", met=3.5),
    CustomActivity(type="Cycling", emoji="🚴", met=7.5),
    CustomActivity(type="Weight Lifting", emoji="🏋️", met=3.5),
    CustomActivity(type="Yoga", emoji="🧘", met=2.5),
    CustomActivity(type="Swimming", emoji="🏊", met=7.0),
)
