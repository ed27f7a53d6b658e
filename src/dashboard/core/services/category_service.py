"""Category, subcategory, template and brand endpoints."""

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from src.dashboard.core.errors import ApiError
from src.dashboard.core.models.catalog import Category, Subcategory
from src.dashboard.core.models.template import Template
from src.dashboard.core.services.api_client import ApiClient


def _require_name(data: dict[str, Any], what: str) -> None:
    if not str(data.get("name") or "").strip():
        raise ValueError(f"{what} name is required")


def _template_path(category_id: str, subcategory_id: str | None = None) -> str:
    if subcategory_id:
        return f"/categories/{category_id}/template/{subcategory_id}"
    return f"/categories/{category_id}/template"


def _brands_path(category_id: str, subcategory_id: str) -> str:
    return f"/categories/{category_id}/subcategories/{subcategory_id}/brands"


def _brands_from(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    return [str(brand) for brand in payload.get("brands") or []]


class CategoryService:
    """Thin pass-through to the category endpoints.

    Every write returns what the server answered; callers replace their local
    copy with it instead of merging.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_categories(self) -> list[Category]:
        data = await self.api.get("/categories")
        return [Category.model_validate(item) for item in data or []]

    async def get_category(self, category_id: str) -> Category:
        data = await self.api.get(f"/categories/{category_id}")
        return Category.model_validate(data)

    async def create_category(self, data: dict[str, Any]) -> Category:
        _require_name(data, "Category")
        created = await self.api.post("/categories", json=data)
        logger.info(f"Created category '{data['name']}'")
        return Category.model_validate(created)

    async def update_category(self, category_id: str, data: dict[str, Any]) -> Category:
        _require_name(data, "Category")
        updated = await self.api.put(f"/categories/{category_id}", json=data)
        return Category.model_validate(updated)

    async def delete_category(self, category_id: str) -> None:
        await self.api.delete(f"/categories/{category_id}")
        logger.info(f"Deleted category {category_id}")

    async def add_subcategory(self, category_id: str, data: dict[str, Any]) -> Subcategory:
        _require_name(data, "Subcategory")
        created = await self.api.post(f"/categories/{category_id}/subcategories", json=data)
        return Subcategory.model_validate(created)

    async def update_subcategory(
        self, category_id: str, subcategory_id: str, data: dict[str, Any]
    ) -> Any:
        _require_name(data, "Subcategory")
        return await self.api.put(
            f"/categories/{category_id}/subcategories/{subcategory_id}", json=data
        )

    async def fetch_feature_template(
        self, category_id: str, subcategory_id: str | None = None
    ) -> Template:
        """Fetch a template, propagating every failure."""
        data = await self.api.get(_template_path(category_id, subcategory_id))
        return Template.model_validate(data or {})

    async def get_feature_template(
        self, category_id: str, subcategory_id: str | None = None
    ) -> Template:
        """Fetch a template; any failure yields an empty template."""
        # ValueError also covers undecodable bodies and pydantic ValidationError
        try:
            return await self.fetch_feature_template(category_id, subcategory_id)
        except (httpx.HTTPError, ApiError, ValueError) as e:
            logger.warning(
                f"Template for ({category_id}, {subcategory_id}) unavailable, using empty template: {e}"
            )
            return Template.empty()

    async def save_feature_template(self, category_id: str, payload: dict[str, Any]) -> Any:
        return await self.api.post(f"/categories/{category_id}/template", json=payload)

    async def fetch_brands(self, category_id: str, subcategory_id: str) -> list[str]:
        """Fetch the brand list, propagating every failure."""
        return _brands_from(await self.api.get(_brands_path(category_id, subcategory_id)))

    async def get_brands(self, category_id: str, subcategory_id: str) -> list[str]:
        """Fetch the brand list; any failure yields an empty list."""
        try:
            return await self.fetch_brands(category_id, subcategory_id)
        except (httpx.HTTPError, ApiError, ValueError) as e:
            logger.warning(f"Brands for ({category_id}, {subcategory_id}) unavailable: {e}")
            return []

    async def add_brand(self, category_id: str, subcategory_id: str, brand: str) -> list[str]:
        if not brand.strip():
            raise ValueError("Brand name is required")
        data = await self.api.post(
            _brands_path(category_id, subcategory_id), json={"brand": brand.strip()}
        )
        return _brands_from(data)

    async def delete_brand(self, category_id: str, subcategory_id: str, brand: str) -> list[str]:
        data = await self.api.delete(
            f"{_brands_path(category_id, subcategory_id)}/{quote(brand, safe='')}"
        )
        return _brands_from(data)
