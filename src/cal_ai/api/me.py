"""Endpoints that read and update the active user's data."""

import datetime
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from cal_ai.api.dependencies import (
    get_container,
    require_current_user,
    updated_or_conflict,
)
from cal_ai.api.models import (
    ActivityRequest,
    AnalysisLogRequest,
    CustomActivityRequest,
    ExerciseRequest,
    LogPreppedMealRequest,
    MacroGoalsRequest,
    MealRequest,
    PageRequest,
    PreppedMealRequest,
    ProfileRequest,
    StepsRequest,
    ThemeRequest,
    WaterRequest,
    WeightRequest,
)
from cal_ai.containers import AppContainer
from cal_ai.domain.activities import CustomActivity
from cal_ai.domain.meals import FoodSearchResult, Meal
from cal_ai.domain.models import Page, UserData
from cal_ai.domain.profile import UserProfile
from cal_ai.domain.reminders import ReminderSettings
from cal_ai.services import stats
from cal_ai.services.goals import build_prepped_meal
from cal_ai.services.vision import meal_from_analysis

router = APIRouter(prefix="/me", tags=["me"])


@router.get("")
async def get_me(user: UserData = Depends(require_current_user)) -> UserData:
    return user


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    _: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete the active user and end the session."""
    container.registry.delete_current_user()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/meals")
async def log_meal(
    body: MealRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    meal = body.to_meal(container.clock.today())
    return updated_or_conflict(container.tracker.log_meal(meal))


@router.post("/meals/from-analysis")
async def log_analyzed_meal(
    body: AnalysisLogRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    """Log a confirmed photo analysis, dated today unless given."""
    meal = meal_from_analysis(body.analysis, body.date or container.clock.today())
    return updated_or_conflict(container.tracker.log_meal(meal))


@router.get("/meals")
async def meals_by_type(
    day: datetime.date | None = None,
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a day's meals grouped by meal type."""
    target = day or container.clock.today()
    groups = stats.group_meals_by_type(user.logged_meals, target)
    return {
        "day": target,
        "groups": [
            {
                "type": group.type,
                "total_calories": group.total_calories,
                "meals": [asdict(entry) for entry in group.meals],
            }
            for group in groups
        ],
    }


@router.get("/meals/{index}")
async def get_meal(
    index: int,
    _: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> Meal:
    meal = container.tracker.meal_at(index)
    if meal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return meal


@router.delete("/meals/{index}")
async def remove_meal(
    index: int,
    navigate_to: Page | None = None,
    container: AppContainer = Depends(get_container),
) -> UserData:
    """Remove a meal by position; optionally navigate in the same update."""
    if navigate_to is None:
        updated = container.tracker.remove_meal(index)
    else:
        updated = container.tracker.remove_meal_and_navigate(index, navigate_to)
    return updated_or_conflict(updated)


@router.post("/activities")
async def log_activity(
    body: ActivityRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    activity = body.to_activity(container.clock.today())
    return updated_or_conflict(container.tracker.log_activity(activity))


@router.post("/exercises")
async def log_exercise(
    body: ExerciseRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    """Log an activity option, estimating calories from the current weight."""
    option = next(
        (
            option
            for option in container.tracker.activity_options()
            if option.type == body.type
        ),
        None,
    )
    if option is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown activity: {body.type}",
        )
    return updated_or_conflict(
        container.tracker.log_exercise(option, body.duration_minutes)
    )


@router.delete("/activities/{index}")
async def remove_activity(
    index: int, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.remove_activity(index))


@router.get("/activity-options")
async def activity_options(
    _: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> list[CustomActivity]:
    return container.tracker.activity_options()


@router.post("/custom-activities")
async def add_custom_activity(
    body: CustomActivityRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(
        container.tracker.add_custom_activity(body.to_custom_activity())
    )


@router.put("/weight")
async def update_weight(
    body: WeightRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(
        container.tracker.update_weight(body.current_weight, body.goal_weight)
    )


@router.put("/profile")
async def update_profile(
    body: ProfileRequest,
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> UserData:
    """Replace the profile and recompute macro goals."""
    profile = UserProfile(**body.to_profile_data().model_dump(), id=user.profile.id)
    return updated_or_conflict(container.tracker.update_profile(profile))


@router.put("/macro-goals")
async def update_macro_goals(
    body: MacroGoalsRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(
        container.tracker.update_macro_goals(body.to_macro_goals())
    )


@router.put("/water/{day}")
async def update_water(
    day: datetime.date,
    body: WaterRequest,
    container: AppContainer = Depends(get_container),
) -> UserData:
    return updated_or_conflict(container.tracker.update_water_intake(day, body.amount))


@router.get("/water")
async def water_history(
    days: int = Query(default=stats.WEEK_DAYS, gt=0, le=90),
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    series = stats.water_series(
        user.water_intake_history, user.water_goal, container.clock.today(), days
    )
    return {
        "series": [asdict(entry) for entry in series],
        "entries": [
            asdict(entry)
            for entry in stats.logged_water_entries(user.water_intake_history)
        ],
    }


@router.put("/steps/{day}")
async def update_steps(
    day: datetime.date,
    body: StepsRequest,
    container: AppContainer = Depends(get_container),
) -> UserData:
    return updated_or_conflict(container.tracker.update_steps(day, body.steps))


@router.post("/favorites/toggle")
async def toggle_favorite(
    food: FoodSearchResult, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.toggle_favorite(food))


@router.post("/recents")
async def add_recent_food(
    food: FoodSearchResult, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.add_food_to_recents(food))


@router.post("/prepped-meals")
async def add_prepped_meal(
    body: PreppedMealRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    draft = build_prepped_meal(body.name, body.ingredients, body.servings)
    return updated_or_conflict(container.tracker.add_prepped_meal(draft))


@router.post("/prepped-meals/{meal_id}/log")
async def log_prepped_meal(
    meal_id: str,
    body: LogPreppedMealRequest,
    _: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> UserData:
    prepped = container.tracker.prepped_meal(meal_id)
    if prepped is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    day = body.date or container.clock.today()
    return updated_or_conflict(
        container.tracker.log_prepped_meal(prepped, body.servings, body.type, day)
    )


@router.delete("/prepped-meals/{meal_id}")
async def delete_prepped_meal(
    meal_id: str, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.delete_prepped_meal(meal_id))


@router.put("/reminders")
async def update_reminders(
    settings: ReminderSettings, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.update_reminders(settings))


@router.put("/page")
async def navigate(
    body: PageRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(container.tracker.navigate_to(body.page))


@router.put("/theme")
async def set_theme(
    body: ThemeRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    return updated_or_conflict(
        container.tracker.set_theme_preference(body.preference)
    )


@router.get("/summary")
async def daily_summary(
    day: datetime.date | None = None,
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a day's totals and the calories left against the goal."""
    summary = stats.daily_summary(
        user.logged_meals,
        user.logged_activities,
        day or container.clock.today(),
    )
    calorie_goal = user.macro_goals.calorie_goal
    return {
        **asdict(summary),
        "calorie_goal": calorie_goal,
        "remaining_calories": summary.remaining_calories(calorie_goal),
    }


@router.get("/weekly")
async def weekly_average(
    as_of: datetime.date | None = None,
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    average = stats.weekly_average(
        user.logged_meals, user.logged_activities, as_of or container.clock.today()
    )
    return asdict(average)


@router.get("/reports")
async def report(
    days: Literal[7, 30] = 7,
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Daily series and macro totals for the 7 or 30 day report."""
    series = stats.daily_series(
        user.logged_meals, user.logged_activities, container.clock.today(), days
    )
    return {
        "series": [asdict(entry) for entry in series],
        "macro_totals": asdict(stats.macro_totals(series)),
    }


@router.get("/bmi")
async def body_mass_index(
    user: UserData = Depends(require_current_user),
) -> dict[str, object]:
    reading = stats.bmi(
        stats.current_weight(user.weight_history), user.profile.height
    )
    return {"bmi": asdict(reading) if reading else None}


@router.get("/insights")
async def insights(
    user: UserData = Depends(require_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, list[str]]:
    """Coaching suggestions from the last seven days."""
    weekly = stats.weekly_average(
        user.logged_meals, user.logged_activities, container.clock.today()
    )
    suggestions = await container.insights_service.suggest(
        user.profile, user.macro_goals, weekly
    )
    return {"suggestions": suggestions}
