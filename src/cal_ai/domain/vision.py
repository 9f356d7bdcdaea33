"""Models for AI assistant results."""

from pydantic import BaseModel, Field

from cal_ai.domain.meals import FoodSearchResult, MealType


class MealPhotoExtract(BaseModel):
    """Structured output for meal photo analysis."""

    meal_name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)
    fiber: float | None = Field(default=None, ge=0.0)
    sugar: float | None = Field(default=None, ge=0.0)
    sodium: float | None = Field(default=None, ge=0.0)
    portion_suggestion: str | None = None


class MealAnalysis(BaseModel):
    """Photo analysis ready to be logged once a date is attached."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    portion_suggestion: str | None = None
    type: MealType


class FoodSearchExtract(BaseModel):
    """Structured output for food search."""

    foods: list[FoodSearchResult]


class InsightExtract(BaseModel):
    """Structured output for weekly coaching suggestions."""

    suggestions: list[str]
