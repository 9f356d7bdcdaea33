"""Food lookup endpoints backed by the external collaborators."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from cal_ai.api.dependencies import get_container
from cal_ai.api.models import FoodSearchRequest
from cal_ai.containers import AppContainer
from cal_ai.domain.meals import FoodSearchResult
from cal_ai.domain.vision import MealAnalysis

router = APIRouter(prefix="/foods", tags=["foods"])

MAX_IMAGE_BYTES = 10 * 1024 * 1024


@router.post("/search")
async def search_foods(
    body: FoodSearchRequest, container: AppContainer = Depends(get_container)
) -> list[FoodSearchResult]:
    return await container.food_search_service.search(body.query)


@router.get("/barcode/{code}")
async def lookup_barcode(
    code: str, container: AppContainer = Depends(get_container)
) -> FoodSearchResult:
    result = await container.barcode_service.lookup(code)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Barcode {code} not found.",
        )
    return result


@router.post("/photo-analysis")
async def analyze_photo(
    request: Request, container: AppContainer = Depends(get_container)
) -> MealAnalysis:
    """Estimate nutrition for the raw image in the request body."""
    image_bytes = await request.body()
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image body is empty."
        )
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image is too large.",
        )
    return await container.vision_service.analyze(image_bytes, container.clock.now())
