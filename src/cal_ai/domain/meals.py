"""Domain models for meal logging."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class MealType(str, Enum):
    """Diary slot a meal is logged under."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACKS = "Snacks"


class FoodCategory(str, Enum):
    """Browse categories for the food picker."""

    ALL = "All"
    MEAL_PREP = "Meal Prep"
    FRUITS = "Fruits"
    VEGGIES = "Veggies"
    PROTEIN = "Protein"
    CARBS = "Carbs"
    DAIRY = "Dairy"
    DISHES = "Dishes"


class Meal(BaseModel):
    """A logged meal. Identified by its position in the owner's meal list."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    type: MealType
    date: datetime.date


class FoodSearchResult(BaseModel):
    """Denormalized nutrition snapshot for a food item."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    calories: float
    protein: float
    carbs: float
    fats: float
    image_url: str | None = None
    category: FoodCategory | None = None


class PreppedMealDraft(BaseModel):
    """Recipe contents before an identifier is assigned."""

    model_config = ConfigDict(frozen=True)

    name: str
    servings: int
    ingredients: list[FoodSearchResult]
    calories_per_serving: float
    protein_per_serving: float
    carbs_per_serving: float
    fats_per_serving: float


class PreppedMeal(PreppedMealDraft):
    """Reusable recipe with a durable identifier."""

    id: str
