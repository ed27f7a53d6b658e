"""Category → subcategory → template/brand cascade behind the product form.

Selecting a category narrows the subcategories; the (category, subcategory)
pair decides which dynamic feature/specification fields and which brands
apply to the draft. Every fetch is tagged with the selection key it was
issued for and its result is committed only while that key is still current,
so a slow response for an abandoned selection can never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Protocol

from loguru import logger

from src.dashboard.core.errors import UnknownSelectionError
from src.dashboard.core.models.catalog import Category, SelectionKey, Subcategory
from src.dashboard.core.models.product import ProductDraft
from src.dashboard.core.models.template import Template, apply_template
from src.dashboard.runtime.context import get_config


class CatalogLookup(Protocol):
    """The read-only lookups the cascade needs; ``CategoryService`` provides them."""

    async def get_categories(self) -> list[Category]: ...

    async def get_feature_template(
        self, category_id: str, subcategory_id: str | None = None
    ) -> Template: ...

    async def get_brands(self, category_id: str, subcategory_id: str) -> list[str]: ...


class CascadeState(str, Enum):
    """Where a form instance is in the selection cascade."""

    IDLE = "idle"
    TEMPLATE_LOADING = "template_loading"
    TEMPLATE_READY = "template_ready"
    TEMPLATE_AND_BRANDS_LOADING = "template_and_brands_loading"
    TEMPLATE_AND_BRANDS_READY = "template_and_brands_ready"


class TemplateCascade:
    """Keeps one product draft in sync with its category selection."""

    def __init__(
        self,
        catalog: CatalogLookup,
        draft: ProductDraft | None = None,
        timeout: float | None = None,
    ):
        self._catalog = catalog
        self._timeout = timeout if timeout is not None else get_config().api.timeout_seconds
        self._key = SelectionKey()

        self.categories: list[Category] = []
        self.subcategories: list[Subcategory] = []
        self.brands: list[str] = []
        self.template = Template.empty()
        self.draft = draft or ProductDraft()
        self.state = CascadeState.IDLE

    @property
    def key(self) -> SelectionKey:
        """The selection every pending response is compared against."""
        return self._key

    @property
    def category(self) -> Category | None:
        if not self._key.category_id:
            return None
        return self._find_category(self._key.category_id)

    def _find_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    async def load_categories(self) -> list[Category]:
        """Fetch the category tree; failures propagate since the form cannot open without it."""
        self.categories = await self._catalog.get_categories()
        return self.categories

    async def select_category(self, category_id: str | None) -> Template:
        """Switch category, clearing subcategory and brand, then resolve its default template."""
        category = None
        if category_id:
            category = self._find_category(category_id)
            if category is None:
                raise UnknownSelectionError(f"Unknown category '{category_id}'")

        key = SelectionKey(category_id or None, None)
        self._key = key

        self.draft.category_id = category.id if category else ""
        self.draft.category = category.name if category else ""
        self.draft.subcategory_id = ""
        self.draft.subcategory_name = ""
        self.draft.brand = ""
        self.brands = []
        self.subcategories = list(category.subcategories) if category else []

        if category is None:
            self._commit_template(Template.empty())
            self.state = CascadeState.IDLE
            return self.template

        return await self._resolve_and_commit(key)

    async def select_subcategory(self, subcategory_id: str | None) -> Template:
        """Switch subcategory; a non-empty one also fetches its brands concurrently."""
        category = self.category
        if category is None:
            raise UnknownSelectionError("Select a category before a subcategory")

        subcategory = None
        if subcategory_id:
            subcategory = category.find_subcategory(subcategory_id)
            if subcategory is None:
                raise UnknownSelectionError(
                    f"Subcategory '{subcategory_id}' does not belong to '{category.name}'"
                )

        key = SelectionKey(category.id, subcategory.id if subcategory else None)
        self._key = key

        self.draft.subcategory_id = subcategory.id if subcategory else ""
        self.draft.subcategory_name = subcategory.name if subcategory else ""
        self.draft.brand = ""
        self.brands = []

        # Brands only exist for a complete key
        if not key.is_complete:
            return await self._resolve_and_commit(key)

        self.state = CascadeState.TEMPLATE_AND_BRANDS_LOADING
        template, brands = await asyncio.gather(
            self.resolve_template(category.id, subcategory.id),
            self.resolve_brands(category.id, subcategory.id),
        )

        if key != self._key:
            logger.debug(f"Discarding template and brands for superseded selection {key}")
            return template

        self._commit_template(template)
        self.brands = brands
        self.state = CascadeState.TEMPLATE_AND_BRANDS_READY
        return template

    def select_brand(self, brand: str | None) -> None:
        if brand and brand not in self.brands:
            raise UnknownSelectionError(f"Brand '{brand}' is not offered for this subcategory")
        self.draft.brand = brand or ""

    async def resolve_template(
        self, category_id: str, subcategory_id: str | None = None
    ) -> Template:
        """Fetch the template for a key, degrading to an empty one on failure or timeout."""
        try:
            return await asyncio.wait_for(
                self._catalog.get_feature_template(category_id, subcategory_id),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Template fetch for ({category_id}, {subcategory_id}) timed out after {self._timeout}s"
            )
            return Template.empty()

    async def resolve_brands(self, category_id: str, subcategory_id: str) -> list[str]:
        """Fetch the brands for a complete key, degrading to an empty list on failure or timeout."""
        try:
            return await asyncio.wait_for(
                self._catalog.get_brands(category_id, subcategory_id),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Brand fetch for ({category_id}, {subcategory_id}) timed out after {self._timeout}s"
            )
            return []

    async def _resolve_and_commit(self, key: SelectionKey) -> Template:
        self.state = CascadeState.TEMPLATE_LOADING
        template = await self.resolve_template(key.category_id, key.subcategory_id)

        if key != self._key:
            logger.debug(f"Discarding template for superseded selection {key}")
            return template

        self._commit_template(template)
        self.state = CascadeState.TEMPLATE_READY
        return template

    def _commit_template(self, template: Template) -> None:
        self.template = template
        self.draft.features = apply_template(template.feature_fields, self.draft.features)
        self.draft.specifications = apply_template(
            template.spec_fields, self.draft.specifications
        )

    async def open_draft(self, product: dict[str, Any] | None = None) -> ProductDraft:
        """Start a new draft, or an edit draft restoring the product's selection."""
        if not self.categories:
            await self.load_categories()

        self._key = SelectionKey()
        self.draft = ProductDraft.from_product(product) if product else ProductDraft()
        self.template = Template.empty()
        self.subcategories = []
        self.brands = []
        self.state = CascadeState.IDLE

        if product is None:
            return self.draft

        brand = self.draft.brand
        features = dict(self.draft.features)
        specifications = dict(self.draft.specifications)
        category_id = self.draft.category_id
        subcategory_id = self.draft.subcategory_id
        category = self._find_category(category_id) if category_id else None
        if category is None:
            if category_id:
                logger.warning(f"Product category '{category_id}' no longer exists")
            return self.draft

        await self.select_category(category.id)
        if subcategory_id and category.find_subcategory(subcategory_id):
            await self.select_subcategory(subcategory_id)

        # The category-level template may not declare the stored subcategory fields
        self.draft.features = apply_template(self.template.feature_fields, features)
        self.draft.specifications = apply_template(self.template.spec_fields, specifications)
        # Brands are server-owned; keep the stored one even if the list moved on
        self.draft.brand = brand
        return self.draft

    def validate(self) -> ProductDraft:
        """Check the draft against the resolved template before submitting.

        Raises:
            DraftValidationError: Required data is missing.
        """
        self.draft.validate_against(self.template)
        return self.draft

    def close_draft(self) -> None:
        """Discard the draft (cancel or after a successful submit)."""
        self._key = SelectionKey()
        self.draft = ProductDraft()
        self.template = Template.empty()
        self.subcategories = []
        self.brands = []
        self.state = CascadeState.IDLE


__all__ = [
    "CascadeState",
    "CatalogLookup",
    "TemplateCascade",
]
