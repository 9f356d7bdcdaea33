"""Tests for the pure per-user update functions."""

from datetime import date, timedelta

import pytest

from cal_ai.domain.activities import Activity, CustomActivity
from cal_ai.domain.meals import MealType, PreppedMealDraft
from cal_ai.domain.models import Page, ThemePreference, UserData
from cal_ai.domain.profile import MacroGoals, PrimaryGoal, UserProfile
from cal_ai.domain.reminders import Reminder, ReminderSettings
from cal_ai.services import reducers
from cal_ai.services.goals import calculate_goals
from tests.conftest import TODAY, make_food, make_meal, make_profile

YESTERDAY = TODAY - timedelta(days=1)


@pytest.fixture
def user() -> UserData:
    return reducers.new_user_data(make_profile(), "user-1", 180, TODAY)


def _activity(day: date = TODAY) -> Activity:
    return Activity(
        name="Running", type="Running", duration=30, calories_burned=400, date=day
    )


def test_new_user_data_seeds_defaults(user: UserData) -> None:
    assert user.profile.id == "user-1"
    assert user.macro_goals == calculate_goals(user.profile, 180)
    assert [(entry.date, entry.weight) for entry in user.weight_history] == [
        (TODAY, 180)
    ]
    assert user.goal_weight == 165
    assert user.water_goal == 90
    assert user.steps_goal == 10000
    assert user.day_streak == 0
    assert user.page is Page.DASHBOARD
    assert user.reminders == ReminderSettings()


def test_new_user_data_keeps_weight_as_goal_unless_losing() -> None:
    user = reducers.new_user_data(
        make_profile(primary_goal=PrimaryGoal.GAIN_MUSCLE), "user-2", 150, TODAY
    )

    assert user.goal_weight == 150


def test_first_log_of_day_after_logging_yesterday_extends_streak(
    user: UserData,
) -> None:
    user = user.model_copy(
        update={"logged_meals": [make_meal(YESTERDAY)], "day_streak": 4}
    )

    first = reducers.log_meal(user, make_meal(), today=TODAY)
    second = reducers.log_meal(first, make_meal(name="Salad"), today=TODAY)

    assert first.day_streak == 5
    assert second.day_streak == 5


def test_first_log_without_yesterday_resets_streak(user: UserData) -> None:
    user = user.model_copy(
        update={
            "logged_meals": [make_meal(TODAY - timedelta(days=3))],
            "day_streak": 7,
        }
    )

    updated = reducers.log_meal(user, make_meal(), today=TODAY)

    assert updated.day_streak == 1


def test_activity_yesterday_counts_towards_streak(user: UserData) -> None:
    user = user.model_copy(
        update={"logged_activities": [_activity(YESTERDAY)], "day_streak": 2}
    )

    updated = reducers.log_meal(user, make_meal(), today=TODAY)

    assert updated.day_streak == 3


def test_back_dated_log_leaves_streak_alone(user: UserData) -> None:
    user = user.model_copy(update={"day_streak": 3})

    updated = reducers.log_meal(user, make_meal(YESTERDAY), today=TODAY)

    assert updated.day_streak == 3
    assert updated.logged_meals[-1].date == YESTERDAY


def test_logging_returns_to_dashboard(user: UserData) -> None:
    user = reducers.navigate_to(user, Page.LOG_MEAL)

    after_meal = reducers.log_meal(user, make_meal(), today=TODAY)
    after_activity = reducers.log_activity(
        reducers.navigate_to(after_meal, Page.LOG_ACTIVITY), _activity(), today=TODAY
    )

    assert after_meal.page is Page.DASHBOARD
    assert after_activity.page is Page.DASHBOARD
    assert after_activity.day_streak == 1


def test_updates_do_not_mutate_the_input(user: UserData) -> None:
    reducers.log_meal(user, make_meal(), today=TODAY)

    assert user.logged_meals == []


def test_remove_meal_by_position(user: UserData) -> None:
    meals = [make_meal(name="A"), make_meal(name="B"), make_meal(name="C")]
    user = user.model_copy(update={"logged_meals": meals})

    updated = reducers.remove_meal(user, 1)

    assert [meal.name for meal in updated.logged_meals] == ["A", "C"]


def test_remove_out_of_range_is_a_no_op(user: UserData) -> None:
    user = user.model_copy(
        update={"logged_meals": [make_meal()], "logged_activities": [_activity()]}
    )

    assert reducers.remove_meal(user, 5).logged_meals == user.logged_meals
    assert reducers.remove_meal(user, -1).logged_meals == user.logged_meals
    assert (
        reducers.remove_activity(user, 3).logged_activities == user.logged_activities
    )


def test_remove_meal_and_navigate_is_one_update(user: UserData) -> None:
    user = user.model_copy(
        update={"logged_meals": [make_meal()], "page": Page.MEAL_DETAIL}
    )

    updated = reducers.remove_meal_and_navigate(user, 0, Page.DIARY)

    assert updated.logged_meals == []
    assert updated.page is Page.DIARY


def test_remove_activity(user: UserData) -> None:
    user = user.model_copy(update={"logged_activities": [_activity()]})

    assert reducers.remove_activity(user, 0).logged_activities == []


def test_update_weight_twice_on_same_day_keeps_one_entry(user: UserData) -> None:
    first = reducers.update_weight(user, 178, 160, today=TODAY)
    second = reducers.update_weight(first, 177, 158, today=TODAY)

    today_entries = [entry for entry in second.weight_history if entry.date == TODAY]
    assert [entry.weight for entry in today_entries] == [177]
    assert second.goal_weight == 158
    assert second.page is Page.SETTINGS


def test_update_weight_keeps_history_sorted(user: UserData) -> None:
    later = reducers.update_weight(user, 176, 165, today=TODAY + timedelta(days=2))
    earlier = reducers.update_weight(later, 181, 165, today=YESTERDAY)

    dates = [entry.date for entry in earlier.weight_history]
    assert dates == sorted(dates)
    assert len(dates) == 3
    assert earlier.weight_history[-1].weight == 176


def test_update_profile_recomputes_goals_from_latest_weight(user: UserData) -> None:
    user = reducers.update_weight(user, 200, 180, today=TODAY)
    profile = UserProfile(
        **make_profile(primary_goal=PrimaryGoal.MAINTAIN_WEIGHT).model_dump(),
        id=user.profile.id,
    )

    updated = reducers.update_profile(user, profile)

    assert updated.profile.primary_goal is PrimaryGoal.MAINTAIN_WEIGHT
    assert updated.macro_goals == calculate_goals(profile, 200)
    assert updated.page is Page.SETTINGS


def test_update_profile_without_weight_history_uses_default(user: UserData) -> None:
    user = user.model_copy(update={"weight_history": []})

    updated = reducers.update_profile(user, user.profile)

    assert updated.macro_goals == calculate_goals(user.profile, 150)


def test_update_macro_goals_overrides_directly(user: UserData) -> None:
    goals = MacroGoals(protein=100, carbs=100, fats=50)

    updated = reducers.update_macro_goals(user, goals)

    assert updated.macro_goals == goals
    assert updated.macro_goals.calorie_goal == 1250


def test_water_and_steps_are_absolute_sets(user: UserData) -> None:
    updated = reducers.update_water_intake(user, TODAY, 16)
    updated = reducers.update_water_intake(updated, TODAY, 24)
    updated = reducers.update_steps(updated, TODAY, 4000)
    updated = reducers.update_steps(updated, YESTERDAY, 9000)

    assert updated.water_intake_history == {TODAY: 24}
    assert updated.steps_history == {TODAY: 4000, YESTERDAY: 9000}


def test_toggle_favorite_matches_name_case_insensitively(user: UserData) -> None:
    added = reducers.toggle_favorite(user, make_food("Greek Yogurt"))
    removed = reducers.toggle_favorite(added, make_food("greek yogurt", 120))

    assert [food.name for food in added.favorite_foods] == ["Greek Yogurt"]
    assert removed.favorite_foods == []


def test_recent_foods_replace_duplicates_and_move_to_front(user: UserData) -> None:
    apple = make_food("Apple", 95)
    banana = make_food("Banana", 105)
    apple_again = make_food("APPLE", 80)

    for food in (apple, banana, apple_again):
        user = reducers.add_food_to_recents(user, food)

    assert user.recent_foods == [apple_again, banana]


def test_recent_foods_keep_five(user: UserData) -> None:
    for index in range(7):
        user = reducers.add_food_to_recents(user, make_food(f"Food {index}"))

    assert [food.name for food in user.recent_foods] == [
        "Food 6",
        "Food 5",
        "Food 4",
        "Food 3",
        "Food 2",
    ]


def _draft() -> PreppedMealDraft:
    return PreppedMealDraft(
        name="Chili",
        servings=4,
        ingredients=[make_food("Beans", 800)],
        calories_per_serving=200,
        protein_per_serving=12,
        carbs_per_serving=20,
        fats_per_serving=6,
    )


def test_add_and_delete_prepped_meal(user: UserData) -> None:
    added = reducers.add_prepped_meal(user, _draft(), meal_id="prep-1")
    with_generated_id = reducers.add_prepped_meal(added, _draft())

    assert added.prepped_meals[0].id == "prep-1"
    assert with_generated_id.prepped_meals[1].id != "prep-1"
    assert reducers.delete_prepped_meal(added, "prep-1").prepped_meals == []
    assert reducers.delete_prepped_meal(added, "missing") == added


def test_log_prepped_meal_scales_macros(user: UserData) -> None:
    user = reducers.add_prepped_meal(user, _draft(), meal_id="prep-1")
    prepped = user.prepped_meals[0]

    updated = reducers.log_prepped_meal(
        user, prepped, 2, MealType.DINNER, TODAY, today=TODAY
    )

    meal = updated.logged_meals[-1]
    assert meal.name == "Chili (2 servings)"
    assert meal.calories == 400
    assert meal.protein == 24
    assert meal.type is MealType.DINNER
    assert updated.prepped_meals == user.prepped_meals
    assert updated.day_streak == 1


@pytest.mark.parametrize(
    ("servings", "label"),
    [
        (1, "Chili (1 serving)"),
        (0.5, "Chili (0.5 serving)"),
        (1.5, "Chili (1.5 servings)"),
    ],
)
def test_prepped_meal_serving_labels(servings: float, label: str) -> None:
    meal = reducers.prepped_meal_to_meal(_draft(), servings, MealType.LUNCH, TODAY)

    assert meal.name == label


def test_custom_activities_are_appended_without_dedup(user: UserData) -> None:
    rowing = CustomActivity(type="Rowing", emoji="🚣", met=7.0)

    updated = reducers.add_custom_activity(
        reducers.add_custom_activity(user, rowing), rowing
    )

    assert updated.custom_activities == [rowing, rowing]


def test_update_reminders_replaces_settings(user: UserData) -> None:
    settings = ReminderSettings(water=Reminder(enabled=True, time="09:15"))

    updated = reducers.update_reminders(user, settings)

    assert updated.reminders.water.enabled
    assert updated.reminders.water.time == "09:15"


def test_theme_preference(user: UserData) -> None:
    updated = reducers.set_theme_preference(user, ThemePreference.DARK)

    assert updated.theme_preference is ThemePreference.DARK
