"""Open Food Facts product API client."""

from dataclasses import dataclass

import httpx

from cal_ai.services.barcode import BarcodeClient

_PRODUCT_FIELDS = (
    "product_name,generic_name,brands,serving_size,nutriments,"
    "image_front_url,image_url"
)


@dataclass
class HttpxOpenFoodFactsClient(BarcodeClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(
                headers={"User-Agent": "cal-ai-tracker/0.1"}
            ),
        )

    async def get_product(self, code: str) -> dict[str, object] | None:
        """Fetch a product by barcode; None when the database has no match."""
        url = f"{self.base_url}/api/v2/product/{code}.json"
        response = await self.http_client.get(
            url, params={"fields": _PRODUCT_FIELDS}, timeout=15
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") != 1:
            return None
        product = payload.get("product")
        return product if isinstance(product, dict) else None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
