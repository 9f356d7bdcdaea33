"""Current-user operations dispatched through the registry."""

from dataclasses import dataclass
from datetime import date

from cal_ai.clock import Clock
from cal_ai.domain.activities import DEFAULT_ACTIVITIES, Activity, CustomActivity
from cal_ai.domain.meals import (
    FoodSearchResult,
    Meal,
    MealType,
    PreppedMeal,
    PreppedMealDraft,
)
from cal_ai.domain.models import Page, ThemePreference, UserData
from cal_ai.domain.profile import MacroGoals, ProfileData, UserProfile
from cal_ai.domain.reminders import ReminderSettings
from cal_ai.services import reducers
from cal_ai.services.goals import build_activity
from cal_ai.services.registry import UserRegistry
from cal_ai.services.stats import current_weight


@dataclass
class TrackerService:
    """Applies store updates to whichever user is currently active.

    Each method returns the updated snapshot, or None when no user is active.
    """

    registry: UserRegistry
    clock: Clock

    def current_user(self) -> UserData | None:
        return self.registry.current_user()

    def register(
        self, profile_data: ProfileData, current_weight_lbs: float
    ) -> UserData:
        return self.registry.register(
            profile_data, current_weight_lbs, today=self.clock.today()
        )

    def log_meal(self, meal: Meal) -> UserData | None:
        today = self.clock.today()
        return self.registry.update_current(
            lambda user: reducers.log_meal(user, meal, today=today)
        )

    def log_activity(self, activity: Activity) -> UserData | None:
        today = self.clock.today()
        return self.registry.update_current(
            lambda user: reducers.log_activity(user, activity, today=today)
        )

    def log_exercise(
        self, option: CustomActivity, duration_minutes: int
    ) -> UserData | None:
        """Log an activity option for today using the current weight."""
        user = self.registry.current_user()
        if user is None:
            return None
        activity = build_activity(
            option,
            duration_minutes,
            current_weight(user.weight_history),
            self.clock.today(),
        )
        return self.log_activity(activity)

    def remove_meal(self, index: int) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.remove_meal(user, index)
        )

    def remove_meal_and_navigate(self, index: int, page: Page) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.remove_meal_and_navigate(user, index, page)
        )

    def remove_activity(self, index: int) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.remove_activity(user, index)
        )

    def update_weight(
        self, current_weight_lbs: float, goal_weight_lbs: float
    ) -> UserData | None:
        today = self.clock.today()
        return self.registry.update_current(
            lambda user: reducers.update_weight(
                user, current_weight_lbs, goal_weight_lbs, today=today
            )
        )

    def update_profile(self, profile: UserProfile) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.update_profile(user, profile)
        )

    def update_macro_goals(self, goals: MacroGoals) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.update_macro_goals(user, goals)
        )

    def update_water_intake(self, day: date, amount: float) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.update_water_intake(user, day, amount)
        )

    def update_steps(self, day: date, steps: int) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.update_steps(user, day, steps)
        )

    def toggle_favorite(self, food: FoodSearchResult) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.toggle_favorite(user, food)
        )

    def add_food_to_recents(self, food: FoodSearchResult) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.add_food_to_recents(user, food)
        )

    def add_prepped_meal(self, draft: PreppedMealDraft) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.add_prepped_meal(user, draft)
        )

    def log_prepped_meal(
        self, prepped: PreppedMeal, servings: float, meal_type: MealType, day: date
    ) -> UserData | None:
        today = self.clock.today()
        return self.registry.update_current(
            lambda user: reducers.log_prepped_meal(
                user, prepped, servings, meal_type, day, today=today
            )
        )

    def delete_prepped_meal(self, meal_id: str) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.delete_prepped_meal(user, meal_id)
        )

    def add_custom_activity(self, activity: CustomActivity) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.add_custom_activity(user, activity)
        )

    def update_reminders(self, settings: ReminderSettings) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.update_reminders(user, settings)
        )

    def navigate_to(self, page: Page) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.navigate_to(user, page)
        )

    def set_theme_preference(self, preference: ThemePreference) -> UserData | None:
        return self.registry.update_current(
            lambda user: reducers.set_theme_preference(user, preference)
        )

    def current_weight(self) -> float | None:
        user = self.registry.current_user()
        if user is None:
            return None
        return current_weight(user.weight_history)

    def calorie_goal(self) -> float | None:
        user = self.registry.current_user()
        if user is None:
            return None
        return user.macro_goals.calorie_goal

    def meal_at(self, index: int) -> Meal | None:
        """Return the current user's meal at a list position, if any."""
        user = self.registry.current_user()
        if user is None or not 0 <= index < len(user.logged_meals):
            return None
        return user.logged_meals[index]

    def prepped_meal(self, meal_id: str) -> PreppedMeal | None:
        user = self.registry.current_user()
        if user is None:
            return None
        return next((meal for meal in user.prepped_meals if meal.id == meal_id), None)

    def activity_options(self) -> list[CustomActivity]:
        """Built-in activity options followed by the user's own."""
        user = self.registry.current_user()
        custom = user.custom_activities if user else []
        return [*DEFAULT_ACTIVITIES, *custom]
