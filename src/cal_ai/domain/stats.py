"""Domain models for derived summaries."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from cal_ai.domain.meals import Meal, MealType


@dataclass(frozen=True)
class DailySummary:
    """Totals consumed and burned on one day."""

    day: date
    calories: float
    protein: float
    carbs: float
    fats: float
    calories_burned: float

    def remaining_calories(self, calorie_goal: float) -> float:
        """Calories left for the day; burned calories are added back."""
        return calorie_goal + self.calories_burned - self.calories


@dataclass(frozen=True)
class WeeklyAverage:
    """Per-day averages over a seven day window."""

    start: date
    end: date
    calories: float
    protein: float
    carbs: float
    fats: float
    calories_burned: float
    days_with_meals: int
    days_with_activity: int


@dataclass(frozen=True)
class MacroTotals:
    """Macro grams summed over a period."""

    protein: float
    carbs: float
    fats: float


class BmiCategory(str, Enum):
    """BMI classification bands."""

    UNDERWEIGHT = "Underweight"
    HEALTHY = "Healthy"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class BmiReading:
    """Body mass index with its band."""

    value: float
    category: BmiCategory


@dataclass(frozen=True)
class IndexedMeal:
    """Meal paired with its position in the user's meal list."""

    index: int
    meal: Meal


@dataclass(frozen=True)
class MealGroup:
    """Meals of a single type on one day."""

    type: MealType
    meals: list[IndexedMeal]

    @property
    def total_calories(self) -> float:
        """Calories across the group."""
        return sum(entry.meal.calories for entry in self.meals)


@dataclass(frozen=True)
class WaterDay:
    """Water intake against the goal for one day."""

    day: date
    intake: float
    goal: float
