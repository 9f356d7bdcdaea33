"""Request payloads for the local API.

Field constraints here are the only input validation; the store accepts
whatever these models produce.
"""

import datetime

from pydantic import BaseModel, Field

from cal_ai.domain.activities import Activity, CustomActivity
from cal_ai.domain.meals import FoodSearchResult, Meal, MealType
from cal_ai.domain.models import Page, ThemePreference
from cal_ai.domain.profile import MacroGoals, ProfileData
from cal_ai.domain.vision import MealAnalysis


class ProfileRequest(ProfileData):
    name: str = Field(min_length=1)
    age: int = Field(gt=0, lt=130)
    height: float = Field(gt=0)

    def to_profile_data(self) -> ProfileData:
        return ProfileData.model_validate(self.model_dump())


class RegisterRequest(BaseModel):
    profile: ProfileRequest
    current_weight: float = Field(gt=0)


class LoginRequest(BaseModel):
    user_id: str


class MealRequest(BaseModel):
    """Manual meal entry; ``date`` defaults to today."""

    name: str = Field(min_length=1)
    description: str | None = None
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    type: MealType
    date: datetime.date | None = None

    def to_meal(self, today: datetime.date) -> Meal:
        return Meal.model_validate(
            {**self.model_dump(exclude={"date"}), "date": self.date or today}
        )


class ActivityRequest(BaseModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    duration: int = Field(gt=0)
    calories_burned: float = Field(ge=0)
    date: datetime.date | None = None

    def to_activity(self, today: datetime.date) -> Activity:
        return Activity.model_validate(
            {**self.model_dump(exclude={"date"}), "date": self.date or today}
        )


class ExerciseRequest(BaseModel):
    """Log one of the available activity options by its type label."""

    type: str
    duration_minutes: int = Field(gt=0)


class CustomActivityRequest(BaseModel):
    type: str = Field(min_length=1)
    emoji: str = ""
    met: float = Field(gt=0)

    def to_custom_activity(self) -> CustomActivity:
        return CustomActivity.model_validate(self.model_dump())


class WeightRequest(BaseModel):
    current_weight: float = Field(gt=0)
    goal_weight: float = Field(gt=0)


class MacroGoalsRequest(BaseModel):
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)

    def to_macro_goals(self) -> MacroGoals:
        return MacroGoals.model_validate(self.model_dump())


class WaterRequest(BaseModel):
    amount: float = Field(ge=0)


class StepsRequest(BaseModel):
    steps: int = Field(ge=0)


class PreppedMealRequest(BaseModel):
    name: str = Field(min_length=1)
    servings: int = Field(gt=0)
    ingredients: list[FoodSearchResult] = Field(min_length=1)


class LogPreppedMealRequest(BaseModel):
    servings: float = Field(gt=0)
    type: MealType
    date: datetime.date | None = None


class AnalysisLogRequest(BaseModel):
    """Confirmed photo analysis to log, optionally back-dated."""

    analysis: MealAnalysis
    date: datetime.date | None = None


class PageRequest(BaseModel):
    page: Page


class ThemeRequest(BaseModel):
    preference: ThemePreference


class FoodSearchRequest(BaseModel):
    query: str = Field(min_length=1)
