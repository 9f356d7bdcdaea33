"""Pure update functions for the per-user aggregate.

Every function takes the current ``UserData`` snapshot and returns a new one.
None of them validate input or fail: out-of-range positions and unknown ids
leave the snapshot unchanged. Functions that depend on the calendar take an
explicit ``today`` so they stay deterministic.
"""

from datetime import date, timedelta
from typing import TypeVar
from uuid import uuid4

from cal_ai.domain.activities import Activity, CustomActivity
from cal_ai.domain.meals import (
    FoodSearchResult,
    Meal,
    MealType,
    PreppedMeal,
    PreppedMealDraft,
)
from cal_ai.domain.models import (
    MAX_RECENT_FOODS,
    Page,
    ThemePreference,
    UserData,
    WeightEntry,
)
from cal_ai.domain.profile import (
    MacroGoals,
    PrimaryGoal,
    ProfileData,
    UserProfile,
)
from cal_ai.domain.reminders import ReminderSettings
from cal_ai.services.goals import calculate_goals

DEFAULT_WEIGHT_LBS = 150.0
LOSE_WEIGHT_TARGET_DELTA_LBS = 15.0

_T = TypeVar("_T")


def new_user_data(
    profile_data: ProfileData, user_id: str, current_weight: float, today: date
) -> UserData:
    """Seed a fresh aggregate at registration."""
    profile = UserProfile(id=user_id, **profile_data.model_dump())
    goal_weight = (
        current_weight - LOSE_WEIGHT_TARGET_DELTA_LBS
        if profile.primary_goal is PrimaryGoal.LOSE_WEIGHT
        else current_weight
    )
    return UserData(
        profile=profile,
        macro_goals=calculate_goals(profile, current_weight),
        weight_history=[WeightEntry(date=today, weight=current_weight)],
        goal_weight=goal_weight,
    )


def next_streak(user: UserData, log_date: date, today: date) -> int:
    """Streak after logging something dated ``log_date``.

    Only the first log of today changes the streak: it continues when
    yesterday has a log and restarts at 1 otherwise.
    """
    if log_date != today:
        return user.day_streak
    logged_days = {meal.date for meal in user.logged_meals}
    logged_days.update(activity.date for activity in user.logged_activities)
    if today in logged_days:
        return user.day_streak
    if today - timedelta(days=1) in logged_days:
        return user.day_streak + 1
    return 1


def log_meal(user: UserData, meal: Meal, *, today: date) -> UserData:
    return user.model_copy(
        update={
            "logged_meals": [*user.logged_meals, meal],
            "day_streak": next_streak(user, meal.date, today),
            "page": Page.DASHBOARD,
        }
    )


def log_activity(user: UserData, activity: Activity, *, today: date) -> UserData:
    return user.model_copy(
        update={
            "logged_activities": [*user.logged_activities, activity],
            "day_streak": next_streak(user, activity.date, today),
            "page": Page.DASHBOARD,
        }
    )


def remove_meal(user: UserData, index: int) -> UserData:
    return user.model_copy(
        update={"logged_meals": _without_position(user.logged_meals, index)}
    )


def remove_meal_and_navigate(user: UserData, index: int, page: Page) -> UserData:
    """Delete a meal and move to ``page`` in a single snapshot."""
    return user.model_copy(
        update={
            "logged_meals": _without_position(user.logged_meals, index),
            "page": page,
        }
    )


def remove_activity(user: UserData, index: int) -> UserData:
    return user.model_copy(
        update={
            "logged_activities": _without_position(user.logged_activities, index)
        }
    )


def update_weight(
    user: UserData, current_weight: float, goal_weight: float, *, today: date
) -> UserData:
    """Upsert today's weight entry and replace the goal weight."""
    history = [entry for entry in user.weight_history if entry.date != today]
    history.append(WeightEntry(date=today, weight=current_weight))
    history.sort(key=lambda entry: entry.date)
    return user.model_copy(
        update={
            "weight_history": history,
            "goal_weight": goal_weight,
            "page": Page.SETTINGS,
        }
    )


def latest_weight(user: UserData) -> float:
    """Most recent weight, or the default when no history exists."""
    if not user.weight_history:
        return DEFAULT_WEIGHT_LBS
    return user.weight_history[-1].weight


def update_profile(user: UserData, profile: UserProfile) -> UserData:
    """Replace the profile and re-derive macro goals from the latest weight."""
    return user.model_copy(
        update={
            "profile": profile,
            "macro_goals": calculate_goals(profile, latest_weight(user)),
            "page": Page.SETTINGS,
        }
    )


def update_macro_goals(user: UserData, goals: MacroGoals) -> UserData:
    return user.model_copy(update={"macro_goals": goals, "page": Page.SETTINGS})


def update_water_intake(user: UserData, day: date, amount: float) -> UserData:
    return user.model_copy(
        update={"water_intake_history": {**user.water_intake_history, day: amount}}
    )


def update_steps(user: UserData, day: date, steps: int) -> UserData:
    return user.model_copy(
        update={"steps_history": {**user.steps_history, day: steps}}
    )


def toggle_favorite(user: UserData, food: FoodSearchResult) -> UserData:
    """Remove the food from favorites if present by name, otherwise add it."""
    name = food.name.lower()
    remaining = [item for item in user.favorite_foods if item.name.lower() != name]
    if len(remaining) == len(user.favorite_foods):
        remaining.append(food)
    return user.model_copy(update={"favorite_foods": remaining})


def add_food_to_recents(user: UserData, food: FoodSearchResult) -> UserData:
    name = food.name.lower()
    recents = [food] + [
        item for item in user.recent_foods if item.name.lower() != name
    ]
    return user.model_copy(update={"recent_foods": recents[:MAX_RECENT_FOODS]})


def add_prepped_meal(
    user: UserData, draft: PreppedMealDraft, meal_id: str | None = None
) -> UserData:
    prepped = PreppedMeal(id=meal_id or str(uuid4()), **draft.model_dump())
    return user.model_copy(update={"prepped_meals": [*user.prepped_meals, prepped]})


def prepped_meal_to_meal(
    prepped: PreppedMealDraft, servings: float, meal_type: MealType, day: date
) -> Meal:
    """Scale a recipe's per-serving macros into a loggable meal."""
    label = "servings" if servings > 1 else "serving"
    return Meal(
        name=f"{prepped.name} ({_format_servings(servings)} {label})",
        calories=prepped.calories_per_serving * servings,
        protein=prepped.protein_per_serving * servings,
        carbs=prepped.carbs_per_serving * servings,
        fats=prepped.fats_per_serving * servings,
        type=meal_type,
        date=day,
    )


def log_prepped_meal(  # noqa: PLR0913
    user: UserData,
    prepped: PreppedMealDraft,
    servings: float,
    meal_type: MealType,
    day: date,
    *,
    today: date,
) -> UserData:
    """Log a recipe portion. The recipe itself is left untouched."""
    meal = prepped_meal_to_meal(prepped, servings, meal_type, day)
    return log_meal(user, meal, today=today)


def delete_prepped_meal(user: UserData, meal_id: str) -> UserData:
    return user.model_copy(
        update={
            "prepped_meals": [
                meal for meal in user.prepped_meals if meal.id != meal_id
            ]
        }
    )


def add_custom_activity(user: UserData, activity: CustomActivity) -> UserData:
    return user.model_copy(
        update={"custom_activities": [*user.custom_activities, activity]}
    )


def update_reminders(user: UserData, settings: ReminderSettings) -> UserData:
    return user.model_copy(update={"reminders": settings})


def navigate_to(user: UserData, page: Page) -> UserData:
    return user.model_copy(update={"page": page})


def set_theme_preference(user: UserData, preference: ThemePreference) -> UserData:
    return user.model_copy(update={"theme_preference": preference})


def _without_position(items: list[_T], index: int) -> list[_T]:
    return [item for position, item in enumerate(items) if position != index]


def _format_servings(servings: float) -> str:
    if float(servings).is_integer():
        return str(int(servings))
    return f"{servings:g}"
