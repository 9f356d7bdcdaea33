"""Weekly coaching suggestions from averaged intake."""

import logging
from dataclasses import dataclass

from cal_ai.domain.profile import MacroGoals, UserProfile
from cal_ai.domain.stats import WeeklyAverage
from cal_ai.domain.vision import InsightExtract
from cal_ai.services.completion import CompletionClient
from cal_ai.services.errors import ExternalServiceError

MAX_SUGGESTIONS = 3

INSIGHT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "suggestions": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["suggestions"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


@dataclass
class InsightsService:
    """Asks the model for two or three short, actionable suggestions."""

    client: CompletionClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    async def suggest(
        self, profile: UserProfile, goals: MacroGoals, weekly: WeeklyAverage
    ) -> list[str]:
        try:
            raw = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=build_insight_prompt(profile, goals, weekly),
                schema=INSIGHT_SCHEMA,
                schema_name="weekly_insights",
            )
            suggestions = InsightExtract.model_validate(raw).suggestions
        except Exception as exc:
            _logger.warning("Insight generation failed: %s", exc)
            raise ExternalServiceError(
                "Failed to generate personalized suggestions."
            ) from exc
        return [text.strip() for text in suggestions if text.strip()][:MAX_SUGGESTIONS]


def build_insight_prompt(
    profile: UserProfile, goals: MacroGoals, weekly: WeeklyAverage
) -> str:
    """Render the coaching prompt from the profile and seven day averages."""
    return "\n".join(
        [
            "Act as a friendly, encouraging nutrition and fitness coach.",
            "Give 2-3 short, actionable suggestions, one sentence each, "
            "with a positive tone.",
            "",
            "User profile:",
            f"- Goal: {profile.primary_goal.value}",
            f"- Age: {profile.age}",
            f"- Gender: {profile.gender.value}",
            f"- Activity level: {profile.activity_level.value}",
            "",
            "Daily goals:",
            f"- Calories: {goals.calorie_goal:.0f} kcal",
            f"- Protein: {goals.protein:.0f}g",
            f"- Carbohydrates: {goals.carbs:.0f}g",
            f"- Fats: {goals.fats:.0f}g",
            "",
            "Average over the last 7 days:",
            f"- Calories eaten: {weekly.calories:.0f} kcal",
            f"- Protein: {weekly.protein:.0f}g",
            f"- Carbohydrates: {weekly.carbs:.0f}g",
            f"- Fats: {weekly.fats:.0f}g",
            f"- Calories burned from activity: {weekly.calories_burned:.0f} kcal",
        ]
    )
