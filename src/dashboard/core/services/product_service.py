"""Product endpoints."""

from typing import Any

from loguru import logger

from src.dashboard.core.models.product import ProductDraft
from src.dashboard.core.services.api_client import ApiClient


def _multipart(draft: ProductDraft) -> dict[str, tuple[None, str]]:
    # (None, value) parts are sent as plain form fields, not file uploads
    return {key: (None, value) for key, value in draft.to_form_data().items()}


class ProductService:
    """Create, read, update and delete products."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list_products(self) -> list[dict[str, Any]]:
        data = await self.api.get("/products")
        return data if isinstance(data, list) else []

    async def get_product(self, product_id: str) -> dict[str, Any]:
        return await self.api.get(f"/products/{product_id}")

    async def create_product(self, draft: ProductDraft) -> dict[str, Any]:
        created = await self.api.post("/products", files=_multipart(draft))
        logger.info(f"Created product '{draft.name}'")
        return created

    async def update_product(self, product_id: str, draft: ProductDraft) -> dict[str, Any]:
        updated = await self.api.put(f"/products/{product_id}", files=_multipart(draft))
        logger.info(f"Updated product {product_id}")
        return updated

    async def delete_product(self, product_id: str) -> None:
        await self.api.delete(f"/products/{product_id}")
        logger.info(f"Deleted product {product_id}")
