"""Tests for the LLM-backed photo, search and insight services."""

import asyncio
from datetime import date, datetime

import pytest

from cal_ai.domain.meals import MealType
from cal_ai.domain.profile import MacroGoals, UserProfile
from cal_ai.domain.stats import WeeklyAverage
from cal_ai.services.cache import InMemoryCache
from cal_ai.services.errors import ExternalServiceError
from cal_ai.services.food_search import FoodSearchService
from cal_ai.services.insights import InsightsService, build_insight_prompt
from cal_ai.services.vision import VisionService, meal_from_analysis
from tests.conftest import FakeCompletionClient, make_profile

_PHOTO_RESULT = {
    "meal_name": "Salmon bowl",
    "calories": 620,
    "protein": 38,
    "carbs": 55,
    "fats": 24,
    "fiber": 6,
    "sugar": None,
    "sodium": 780,
    "portion_suggestion": "Consider half the rice.",
}


def _vision(client: FakeCompletionClient) -> VisionService:
    return VisionService(
        client=client, model="gpt-test", reasoning_effort=None, store=False
    )


def test_analyze_photo_picks_meal_type_from_time(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.append(dict(_PHOTO_RESULT))
    service = _vision(completion_client)

    analysis = asyncio.run(
        service.analyze(b"\x89PNG\r\n\x1a\nrest", datetime(2026, 10, 19, 19, 15))
    )

    assert analysis.name == "Salmon bowl"
    assert analysis.type is MealType.DINNER
    assert analysis.sugar is None
    assert analysis.portion_suggestion == "Consider half the rice."
    call = completion_client.calls[0]
    assert call["schema_name"] == "meal_photo"
    assert str(call["image_data_url"]).startswith("data:image/png;base64,")


def test_meal_from_analysis_attaches_date(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.append(dict(_PHOTO_RESULT))
    analysis = asyncio.run(
        _vision(completion_client).analyze(b"jpeg", datetime(2026, 10, 19, 7, 0))
    )

    meal = meal_from_analysis(analysis, date(2026, 10, 18))

    assert meal.date == date(2026, 10, 18)
    assert meal.type is MealType.BREAKFAST
    assert meal.sodium == 780


def test_photo_failure_becomes_retryable_error(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.append(RuntimeError("timeout"))

    with pytest.raises(ExternalServiceError, match="from the image"):
        asyncio.run(_vision(completion_client).extract(b"jpeg"))


def test_invalid_photo_payload_becomes_retryable_error(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.append({**_PHOTO_RESULT, "calories": -5})

    with pytest.raises(ExternalServiceError):
        asyncio.run(_vision(completion_client).extract(b"jpeg"))


def _food_payload(name: str) -> dict[str, object]:
    return {
        "foods": [
            {
                "name": name,
                "description": "1 medium",
                "calories": 95,
                "protein": 0.5,
                "carbs": 25,
                "fats": 0.3,
                "image_url": None,
            }
        ]
    }


def _search(client: FakeCompletionClient) -> FoodSearchService:
    return FoodSearchService(
        client=client, cache=InMemoryCache(), model="gpt-test", retry_delay_seconds=0
    )


def test_food_search_caches_by_normalized_query(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.append(_food_payload("Apple"))
    service = _search(completion_client)

    first = asyncio.run(service.search("Apple"))
    second = asyncio.run(service.search("  apple "))

    assert [food.name for food in first] == ["Apple"]
    assert second == first
    assert len(completion_client.calls) == 1
    assert '"Apple"' in str(completion_client.calls[0]["prompt"])


def test_food_search_retries_once(completion_client: FakeCompletionClient) -> None:
    completion_client.responses.extend(
        [RuntimeError("rate limited"), _food_payload("Manzana")]
    )

    results = asyncio.run(_search(completion_client).search("manzana"))

    assert results[0].name == "Manzana"
    assert len(completion_client.calls) == 2


def test_food_search_gives_up_after_retry(
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.responses.extend([RuntimeError("down"), RuntimeError("down")])

    with pytest.raises(ExternalServiceError, match="search for food"):
        asyncio.run(_search(completion_client).search("apple"))


def test_blank_food_search_skips_the_model(
    completion_client: FakeCompletionClient,
) -> None:
    assert asyncio.run(_search(completion_client).search("   ")) == []
    assert completion_client.calls == []


def _weekly() -> WeeklyAverage:
    return WeeklyAverage(
        start=date(2026, 10, 13),
        end=date(2026, 10, 19),
        calories=2450,
        protein=95,
        carbs=300,
        fats=90,
        calories_burned=210,
        days_with_meals=5,
        days_with_activity=2,
    )


def _profile() -> UserProfile:
    return UserProfile(id="user-1", **make_profile().model_dump())


def test_insight_prompt_mentions_goals_and_averages() -> None:
    prompt = build_insight_prompt(
        _profile(), MacroGoals(protein=170, carbs=226, fats=75), _weekly()
    )

    assert "Goal: Lose Weight" in prompt
    assert "Calories: 2259 kcal" in prompt
    assert "Calories eaten: 2450 kcal" in prompt
    assert "Calories burned from activity: 210 kcal" in prompt


def test_insights_keep_at_most_three(completion_client: FakeCompletionClient) -> None:
    completion_client.responses.append(
        {"suggestions": ["Eat more protein.", " ", "Walk daily.", "Sleep.", "Hydrate."]}
    )
    service = InsightsService(client=completion_client, model="gpt-test")

    suggestions = asyncio.run(
        service.suggest(_profile(), MacroGoals(protein=1, carbs=1, fats=1), _weekly())
    )

    assert suggestions == ["Eat more protein.", "Walk daily.", "Sleep."]


def test_insight_failure_is_retryable(completion_client: FakeCompletionClient) -> None:
    completion_client.responses.append({"unexpected": True})
    service = InsightsService(client=completion_client, model="gpt-test")

    with pytest.raises(ExternalServiceError, match="personalized suggestions"):
        asyncio.run(
            service.suggest(
                _profile(), MacroGoals(protein=1, carbs=1, fats=1), _weekly()
            )
        )
