"""Meal photo analysis using LLMs."""

import base64
import logging
from dataclasses import dataclass
from datetime import date, datetime

from cal_ai.domain.meals import Meal
from cal_ai.domain.vision import MealAnalysis, MealPhotoExtract
from cal_ai.services.completion import CompletionClient
from cal_ai.services.errors import ExternalServiceError
from cal_ai.services.goals import meal_type_for_hour

_NUMBER = {"type": "number", "minimum": 0.0}

MEAL_PHOTO_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal_name": {"type": "string"},
        "calories": _NUMBER,
        "protein": _NUMBER,
        "carbs": _NUMBER,
        "fats": _NUMBER,
        "fiber": {"anyOf": [_NUMBER, {"type": "null"}]},
        "sugar": {"anyOf": [_NUMBER, {"type": "null"}]},
        "sodium": {"anyOf": [_NUMBER, {"type": "null"}]},
        "portion_suggestion": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "meal_name",
        "calories",
        "protein",
        "carbs",
        "fats",
        "fiber",
        "sugar",
        "sodium",
        "portion_suggestion",
    ],
    "additionalProperties": False,
}

MEAL_PHOTO_PROMPT = (
    "Analyze the food in this image. Provide a nutritional estimate for the "
    "whole plate: calories, protein, carbohydrates and fats in grams, fiber "
    "and sugar in grams, and sodium in milligrams. Give the meal a short name "
    "and one constructive suggestion about the portion size."
)

_logger = logging.getLogger(__name__)


@dataclass
class VisionService:
    """Service that prepares photo prompts and validates results."""

    client: CompletionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def extract(self, image_bytes: bytes) -> MealPhotoExtract:
        """Estimate nutrition for the meal in an image."""
        try:
            raw = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=MEAL_PHOTO_PROMPT,
                schema=MEAL_PHOTO_SCHEMA,
                schema_name="meal_photo",
                image_data_url=_to_data_url(image_bytes),
            )
            return MealPhotoExtract.model_validate(raw)
        except Exception as exc:
            _logger.warning("Meal photo analysis failed: %s", exc)
            raise ExternalServiceError(
                "Failed to get nutritional information from the image."
            ) from exc

    async def analyze(self, image_bytes: bytes, now: datetime) -> MealAnalysis:
        """Analyze a photo and pick the meal slot from the time of day."""
        extract = await self.extract(image_bytes)
        return MealAnalysis(
            name=extract.meal_name,
            calories=extract.calories,
            protein=extract.protein,
            carbs=extract.carbs,
            fats=extract.fats,
            fiber=extract.fiber,
            sugar=extract.sugar,
            sodium=extract.sodium,
            portion_suggestion=extract.portion_suggestion,
            type=meal_type_for_hour(now.hour),
        )


def meal_from_analysis(analysis: MealAnalysis, day: date) -> Meal:
    """Turn an analysis into a loggable meal dated ``day``."""
    return Meal(
        name=analysis.name,
        calories=analysis.calories,
        protein=analysis.protein,
        carbs=analysis.carbs,
        fats=analysis.fats,
        fiber=analysis.fiber,
        sugar=analysis.sugar,
        sodium=analysis.sodium,
        type=analysis.type,
        date=day,
    )


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
