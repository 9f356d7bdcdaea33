"""Domain models for user profiles and nutrition goals."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Gender(str, Enum):
    """Gender options used by the BMR formula."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Prefer not to say"


class ActivityLevel(str, Enum):
    """Self-reported activity tiers."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly Active"
    MODERATELY_ACTIVE = "Moderately Active"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"


class PrimaryGoal(str, Enum):
    """Primary body-composition goal."""

    LOSE_WEIGHT = "Lose Weight"
    MAINTAIN_WEIGHT = "Maintain Weight"
    GAIN_MUSCLE = "Gain Muscle"


class UnitSystem(str, Enum):
    """Display unit system. Stored values are always imperial."""

    IMPERIAL = "imperial"
    METRIC = "metric"


class ProfileData(BaseModel):
    """Profile fields supplied at registration, before an id exists."""

    model_config = ConfigDict(frozen=True)

    name: str
    age: int
    avatar: str = ""
    gender: Gender
    height: float
    activity_level: ActivityLevel
    primary_goal: PrimaryGoal
    unit_system: UnitSystem = UnitSystem.IMPERIAL


class UserProfile(ProfileData):
    """Registered profile. Height is stored in inches."""

    id: str


class MacroGoals(BaseModel):
    """Daily macro targets in grams."""

    model_config = ConfigDict(frozen=True)

    protein: float
    carbs: float
    fats: float

    @property
    def calorie_goal(self) -> float:
        """Calories implied by the macro targets."""
        return self.protein * 4 + self.carbs * 4 + self.fats * 9
