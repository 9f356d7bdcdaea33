"""Packaged food lookup by barcode."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from cal_ai.domain.meals import FoodSearchResult
from cal_ai.services.errors import ExternalServiceError

_logger = logging.getLogger(__name__)


class BarcodeClient(Protocol):
    """Interface for a product database keyed by barcode."""

    async def get_product(self, code: str) -> dict[str, object] | None:
        """Return the raw product record, or None when unknown."""


@dataclass
class BarcodeService:
    """Resolves scanned barcodes into food search results."""

    client: BarcodeClient

    async def lookup(self, code: str) -> FoodSearchResult | None:
        code = code.strip()
        if not code:
            return None
        try:
            product = await self.client.get_product(code)
        except httpx.HTTPError as exc:
            _logger.warning("Barcode lookup failed: code=%s error=%s", code, exc)
            raise ExternalServiceError("Failed to look up the barcode.") from exc
        if not product:
            _logger.info("Barcode not found: code=%s", code)
            return None
        return parse_product(product)


def parse_product(product: dict[str, object]) -> FoodSearchResult | None:
    """Map an Open Food Facts product to a search result.

    Per-serving values are preferred; otherwise the per-100g values are used
    and the description says so. Products without a name or energy value
    are treated as not found.
    """
    name = _first_text(product, "product_name", "generic_name")
    nutriments = product.get("nutriments")
    if not name or not isinstance(nutriments, dict):
        return None

    basis = "serving"
    calories = _nutriment(nutriments, "energy-kcal", basis)
    if calories is None:
        basis = "100g"
        calories = _nutriment(nutriments, "energy-kcal", basis)
    if calories is None:
        return None

    brand = _first_text(product, "brands")
    serving_size = _first_text(product, "serving_size")
    if basis == "serving":
        portion = f"per serving ({serving_size})" if serving_size else "per serving"
    else:
        portion = "per 100 g"
    if brand:
        description = f"{brand}, {portion}"
    else:
        description = portion[0].upper() + portion[1:]

    return FoodSearchResult(
        name=name,
        description=description,
        calories=calories,
        protein=_nutriment(nutriments, "proteins", basis) or 0.0,
        carbs=_nutriment(nutriments, "carbohydrates", basis) or 0.0,
        fats=_nutriment(nutriments, "fat", basis) or 0.0,
        image_url=_first_text(product, "image_front_url", "image_url"),
    )


def _nutriment(nutriments: dict, key: str, basis: str) -> float | None:
    value = nutriments.get(f"{key}_{basis}")
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _first_text(product: dict[str, object], *keys: str) -> str | None:
    for key in keys:
        value = product.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
