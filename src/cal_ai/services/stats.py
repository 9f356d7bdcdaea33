"""Read-side aggregations over a user's logged data."""

from collections.abc import Mapping, Sequence
from datetime import date, timedelta

from cal_ai.dates import last_n_days
from cal_ai.domain.activities import Activity
from cal_ai.domain.meals import Meal, MealType
from cal_ai.domain.models import WeightEntry
from cal_ai.domain.stats import (
    BmiCategory,
    BmiReading,
    DailySummary,
    IndexedMeal,
    MacroTotals,
    MealGroup,
    WaterDay,
    WeeklyAverage,
)

WEEK_DAYS = 7
BMI_FACTOR = 703
_UNDERWEIGHT_BELOW = 18.5
_HEALTHY_BELOW = 25.0
_OVERWEIGHT_BELOW = 30.0


def daily_summary(
    meals: Sequence[Meal], activities: Sequence[Activity], day: date
) -> DailySummary:
    """Sum meals and activities logged on ``day``."""
    day_meals = [meal for meal in meals if meal.date == day]
    return DailySummary(
        day=day,
        calories=sum(meal.calories for meal in day_meals),
        protein=sum(meal.protein for meal in day_meals),
        carbs=sum(meal.carbs for meal in day_meals),
        fats=sum(meal.fats for meal in day_meals),
        calories_burned=sum(
            activity.calories_burned for activity in activities if activity.date == day
        ),
    )


def weekly_average(
    meals: Sequence[Meal], activities: Sequence[Activity], as_of: date
) -> WeeklyAverage:
    """Average intake over the seven days ending at ``as_of``.

    Meal totals are divided by the number of days that have at least one
    meal, so empty days do not dilute the average. Calories burned are
    averaged the same way over days with activity.
    """
    start = as_of - timedelta(days=WEEK_DAYS - 1)
    window_meals = [meal for meal in meals if start <= meal.date <= as_of]
    window_activities = [
        activity for activity in activities if start <= activity.date <= as_of
    ]
    meal_days = len({meal.date for meal in window_meals})
    activity_days = len({activity.date for activity in window_activities})
    return WeeklyAverage(
        start=start,
        end=as_of,
        calories=_average(sum(meal.calories for meal in window_meals), meal_days),
        protein=_average(sum(meal.protein for meal in window_meals), meal_days),
        carbs=_average(sum(meal.carbs for meal in window_meals), meal_days),
        fats=_average(sum(meal.fats for meal in window_meals), meal_days),
        calories_burned=_average(
            sum(activity.calories_burned for activity in window_activities),
            activity_days,
        ),
        days_with_meals=meal_days,
        days_with_activity=activity_days,
    )


def bmi(weight_lbs: float, height_inches: float) -> BmiReading | None:
    """Imperial BMI with its category, or None for missing measurements."""
    if weight_lbs <= 0 or height_inches <= 0:
        return None
    value = weight_lbs / (height_inches * height_inches) * BMI_FACTOR
    return BmiReading(value=value, category=bmi_category(value))


def bmi_category(value: float) -> BmiCategory:
    if value < _UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if value < _HEALTHY_BELOW:
        return BmiCategory.HEALTHY
    if value < _OVERWEIGHT_BELOW:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def group_meals_by_type(meals: Sequence[Meal], day: date) -> list[MealGroup]:
    """Partition a day's meals into the four meal types.

    Every type is present even when empty. Log order is kept within each
    group and each meal carries its index in ``meals``.
    """
    buckets: dict[MealType, list[IndexedMeal]] = {
        meal_type: [] for meal_type in MealType
    }
    for index, meal in enumerate(meals):
        if meal.date == day:
            buckets[meal.type].append(IndexedMeal(index=index, meal=meal))
    return [
        MealGroup(type=meal_type, meals=entries)
        for meal_type, entries in buckets.items()
    ]


def daily_series(
    meals: Sequence[Meal], activities: Sequence[Activity], end: date, days: int
) -> list[DailySummary]:
    """Per-day summaries for the ``days`` days ending at ``end``."""
    return [daily_summary(meals, activities, day) for day in last_n_days(end, days)]


def macro_totals(series: Sequence[DailySummary]) -> MacroTotals:
    return MacroTotals(
        protein=sum(entry.protein for entry in series),
        carbs=sum(entry.carbs for entry in series),
        fats=sum(entry.fats for entry in series),
    )


def water_series(
    history: Mapping[date, float], goal: float, end: date, days: int = WEEK_DAYS
) -> list[WaterDay]:
    return [
        WaterDay(day=day, intake=history.get(day, 0), goal=goal)
        for day in last_n_days(end, days)
    ]


def logged_water_entries(history: Mapping[date, float]) -> list[WaterDay]:
    """Days with recorded water, newest first. Goal is not tracked per day."""
    return [
        WaterDay(day=day, intake=intake, goal=0)
        for day, intake in sorted(history.items(), reverse=True)
        if intake > 0
    ]


def current_weight(weight_history: Sequence[WeightEntry]) -> float:
    """Latest recorded weight, or 0 when nothing is recorded."""
    if not weight_history:
        return 0.0
    return weight_history[-1].weight


def _average(total: float, days: int) -> float:
    if days == 0:
        return 0.0
    return total / days
