"""Free-text food search backed by an LLM, with caching."""

import asyncio
import logging
from dataclasses import dataclass

from cal_ai.domain.meals import FoodSearchResult
from cal_ai.domain.vision import FoodSearchExtract
from cal_ai.services.cache import Cache
from cal_ai.services.completion import CompletionClient
from cal_ai.services.errors import ExternalServiceError

_OPTIONAL_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}

FOOD_SEARCH_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": _OPTIONAL_STRING,
                    "calories": {"type": "number"},
                    "protein": {"type": "number"},
                    "carbs": {"type": "number"},
                    "fats": {"type": "number"},
                    "image_url": _OPTIONAL_STRING,
                },
                "required": [
                    "name",
                    "description",
                    "calories",
                    "protein",
                    "carbs",
                    "fats",
                    "image_url",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


@dataclass
class FoodSearchService:
    """Service for food lookups with caching and a short retry."""

    client: CompletionClient
    cache: Cache
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    search_ttl_seconds: int | None = None
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[FoodSearchResult]:
        """Return matching foods for a query in any language."""
        normalized = query.strip().lower()
        if not normalized:
            return []
        cache_key = f"food-search:{normalized}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        raw = await self._call_with_retry(_search_prompt(query.strip()))
        try:
            foods = FoodSearchExtract.model_validate(raw).foods
        except ValueError as exc:
            raise ExternalServiceError("Failed to search for food items.") from exc
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Food search: query=%s results=%s", normalized, len(foods))
        return foods

    async def _call_with_retry(self, prompt: str) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await self.client.complete(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    prompt=prompt,
                    schema=FOOD_SEARCH_SCHEMA,
                    schema_name="food_search",
                )
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Food search failed (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise ExternalServiceError(
                        "Failed to search for food items."
                    ) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def _search_prompt(query: str) -> str:
    return (
        f'Find nutritional information for "{query}". The query may be in any '
        "language; answer with food names in the same language. Return a list "
        "of matching food items with calories, protein, carbs and fats for a "
        "standard serving size, a one-sentence description, and a URL of a "
        "representative public image when one is known."
    )
