"""Energy expenditure and macro target calculations."""

from datetime import date

from cal_ai.domain.activities import Activity, CustomActivity
from cal_ai.domain.meals import FoodSearchResult, MealType, PreppedMealDraft
from cal_ai.domain.profile import (
    ActivityLevel,
    Gender,
    MacroGoals,
    PrimaryGoal,
    ProfileData,
)
from cal_ai.units import round_half_up

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54

_GENDER_OFFSETS = {
    Gender.MALE: 5.0,
    Gender.FEMALE: -161.0,
    Gender.OTHER: -78.0,
}

_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_GOAL_OFFSETS = {
    PrimaryGoal.LOSE_WEIGHT: -500.0,
    PrimaryGoal.MAINTAIN_WEIGHT: 0.0,
    PrimaryGoal.GAIN_MUSCLE: 300.0,
}

CARBS_SHARE = 0.40
PROTEIN_SHARE = 0.30
FATS_SHARE = 0.30

_BREAKFAST_START = 5
_LUNCH_START = 11
_DINNER_START = 16
_DINNER_END = 22


def basal_metabolic_rate(profile: ProfileData, weight_lbs: float) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    weight_kg = weight_lbs / LBS_PER_KG
    height_cm = profile.height * CM_PER_INCH
    return (
        10 * weight_kg
        + 6.25 * height_cm
        - 5 * profile.age
        + _GENDER_OFFSETS[profile.gender]
    )


def target_calories(profile: ProfileData, weight_lbs: float) -> float:
    """Daily calorie target: TDEE adjusted for the primary goal."""
    tdee = basal_metabolic_rate(profile, weight_lbs) * _ACTIVITY_MULTIPLIERS[
        profile.activity_level
    ]
    return tdee + _GOAL_OFFSETS[profile.primary_goal]


def calculate_goals(profile: ProfileData, weight_lbs: float) -> MacroGoals:
    """Derive macro targets from a profile and the current weight.

    The split is fixed: 40% carbs, 30% protein, 30% fats of the target
    calories, each rounded to whole grams. Degenerate inputs are not
    rejected.
    """
    target = target_calories(profile, weight_lbs)
    return MacroGoals(
        protein=round_half_up(target * PROTEIN_SHARE / 4),
        carbs=round_half_up(target * CARBS_SHARE / 4),
        fats=round_half_up(target * FATS_SHARE / 9),
    )


def calories_burned(met: float, weight_lbs: float, duration_minutes: int) -> int:
    """Estimate calories burned as MET * kg * hours."""
    if duration_minutes <= 0 or weight_lbs <= 0:
        return 0
    return round_half_up(met * (weight_lbs / LBS_PER_KG) * (duration_minutes / 60))


def build_activity(
    option: CustomActivity, duration_minutes: int, weight_lbs: float, day: date
) -> Activity:
    """Materialize an activity log entry from an activity option."""
    return Activity(
        name=option.type,
        type=option.type,
        duration=duration_minutes,
        calories_burned=calories_burned(option.met, weight_lbs, duration_minutes),
        date=day,
    )


def build_prepped_meal(
    name: str, ingredients: list[FoodSearchResult], servings: int
) -> PreppedMealDraft:
    """Compute per-serving macros for a recipe."""
    portions = servings if servings > 0 else 1
    return PreppedMealDraft(
        name=name,
        servings=portions,
        ingredients=list(ingredients),
        calories_per_serving=sum(item.calories for item in ingredients) / portions,
        protein_per_serving=sum(item.protein for item in ingredients) / portions,
        carbs_per_serving=sum(item.carbs for item in ingredients) / portions,
        fats_per_serving=sum(item.fats for item in ingredients) / portions,
    )


def meal_type_for_hour(hour: int) -> MealType:
    """Guess the meal slot from the hour of day."""
    if _BREAKFAST_START <= hour < _LUNCH_START:
        return MealType.BREAKFAST
    if _LUNCH_START <= hour < _DINNER_START:
        return MealType.LUNCH
    if _DINNER_START <= hour < _DINNER_END:
        return MealType.DINNER
    return MealType.SNACKS
