"""The per-user aggregate persisted as a single unit."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cal_ai.domain.activities import Activity, CustomActivity
from cal_ai.domain.meals import FoodSearchResult, Meal, PreppedMeal
from cal_ai.domain.profile import MacroGoals, UserProfile
from cal_ai.domain.reminders import ReminderSettings

DEFAULT_WATER_GOAL = 90
DEFAULT_STEPS_GOAL = 10000
MAX_RECENT_FOODS = 5


class Page(str, Enum):
    """Screen the user was last on."""

    DASHBOARD = "DASHBOARD"
    DIARY = "DIARY"
    REPORTS = "REPORTS"
    SETTINGS = "SETTINGS"
    LOG_MEAL = "LOG_MEAL"
    CAMERA = "CAMERA"
    BARCODE_SCANNER = "BARCODE_SCANNER"
    ADJUST_MACROS = "ADJUST_MACROS"
    WEIGHT_GOALS = "WEIGHT_GOALS"
    WEIGHT_HISTORY = "WEIGHT_HISTORY"
    WATER_HISTORY = "WATER_HISTORY"
    PROFILE = "PROFILE"
    LOG_ACTIVITY = "LOG_ACTIVITY"
    MANUAL_LOG = "MANUAL_LOG"
    MEAL_PREP_CREATOR = "MEAL_PREP_CREATOR"
    MEAL_DETAIL = "MEAL_DETAIL"


class ThemePreference(str, Enum):
    """Colour scheme preference."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class WeightEntry(BaseModel):
    """Body weight for one calendar day, in lbs."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    weight: float


class UserData(BaseModel):
    """Everything logged by one user."""

    model_config = ConfigDict(frozen=True)

    profile: UserProfile
    logged_meals: list[Meal] = Field(default_factory=list)
    logged_activities: list[Activity] = Field(default_factory=list)
    macro_goals: MacroGoals
    weight_history: list[WeightEntry] = Field(default_factory=list)
    goal_weight: float
    water_intake_history: dict[datetime.date, float] = Field(default_factory=dict)
    water_goal: float = DEFAULT_WATER_GOAL
    steps_history: dict[datetime.date, int] = Field(default_factory=dict)
    steps_goal: int = DEFAULT_STEPS_GOAL
    day_streak: int = 0
    favorite_foods: list[FoodSearchResult] = Field(default_factory=list)
    prepped_meals: list[PreppedMeal] = Field(default_factory=list)
    page: Page = Page.DASHBOARD
    theme_preference: ThemePreference = ThemePreference.SYSTEM
    custom_activities: list[CustomActivity] = Field(default_factory=list)
    recent_foods: list[FoodSearchResult] = Field(default_factory=list)
    reminders: ReminderSettings = Field(default_factory=ReminderSettings)
