"""Client-side product draft."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.dashboard.core.errors import DraftValidationError
from src.dashboard.core.models.template import FieldKind, FieldValue, Template


def _form_value(item: Any, keep_bool: bool) -> FieldValue:
    if item is None:
        return ""
    if isinstance(item, bool):
        return item if keep_bool else str(item).lower()
    return item if isinstance(item, str) else str(item)


class ProductDraft(BaseModel):
    """In-progress product form state.

    Created when a product form opens and discarded on cancel or after a
    successful submit; never persisted on the client.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    name: str = ""
    category: str = Field(default="", description="Category display name")
    category_id: str = Field(default="", alias="categoryId")
    subcategory_id: str = Field(default="", alias="subcategoryId")
    subcategory_name: str = Field(default="", alias="subcategoryName")
    brand: str = ""
    price: str = ""
    original_price: str = Field(default="", alias="originalPrice")
    description: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    stock: int = 0
    weight: str = ""
    rating: float = 0
    features: dict[str, FieldValue] = Field(default_factory=dict)
    specifications: dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "name",
        "category",
        "category_id",
        "subcategory_id",
        "subcategory_name",
        "brand",
        "price",
        "original_price",
        "description",
        "image_url",
        "weight",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        # Form inputs are strings; the backend returns numbers for prices
        if value is None:
            return ""
        return str(value)

    @field_validator("stock", "rating", mode="before")
    @classmethod
    def _blank_as_zero(cls, value: Any) -> Any:
        if value in (None, ""):
            return 0
        return value

    @field_validator("features", "specifications", mode="before")
    @classmethod
    def _normalize_values(cls, value: Any, info: ValidationInfo) -> Any:
        if not value:
            return {}
        if not isinstance(value, dict):
            return value
        # Specification inputs are never checkboxes, so stored booleans become text
        keep_bool = info.field_name == "features"
        return {key: _form_value(item, keep_bool) for key, item in value.items()}

    @classmethod
    def from_product(cls, product: dict[str, Any]) -> ProductDraft:
        """Seed an edit draft from a product returned by the backend."""
        image = product.get("image") or ""
        return cls(
            name=product.get("name"),
            category=product.get("category"),
            category_id=product.get("categoryId"),
            subcategory_id=product.get("subcategoryId"),
            subcategory_name=product.get("subcategoryName"),
            brand=product.get("brand"),
            price=product.get("price"),
            original_price=product.get("originalPrice"),
            description=product.get("description"),
            image_url=image if image.startswith("http") else "",
            stock=product.get("stock"),
            weight=product.get("weight"),
            rating=product.get("rating"),
            features=product.get("features"),
            specifications=product.get("specifications"),
        )

    def validate_against(self, template: Template) -> None:
        """Check the draft is complete enough to submit.

        Raises:
            DraftValidationError: listing every missing field.
        """
        missing = []
        for attribute in ("name", "price", "category_id"):
            if not str(getattr(self, attribute)).strip():
                missing.append(attribute)

        for field in template.feature_fields:
            if field.required and field.kind is not FieldKind.CHECKBOX:
                if not str(self.features.get(field.name, "")).strip():
                    missing.append(f"features.{field.name}")

        for field in template.spec_fields:
            if field.required and not str(self.specifications.get(field.key, "")).strip():
                missing.append(f"specifications.{field.key}")

        if missing:
            raise DraftValidationError(missing)

    def to_form_data(self) -> dict[str, str]:
        """Multipart form fields accepted by the product create/update endpoints."""
        return {
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "originalPrice": self.original_price,
            "weight": self.weight,
            "description": self.description,
            "rating": str(self.rating),
            "stock": str(self.stock),
            "imageUrl": self.image_url,
            "categoryId": self.category_id,
            "subcategoryId": self.subcategory_id,
            "subcategoryName": self.subcategory_name,
            "brand": self.brand,
            "features": json.dumps(self.features),
            "specifications": json.dumps(self.specifications),
        }
