"""Editing the feature/specification template of a category or subcategory."""

from __future__ import annotations

from typing import Any

from loguru import logger
from pydantic import TypeAdapter

from src.dashboard.core.errors import UnknownSelectionError
from src.dashboard.core.models.catalog import Category
from src.dashboard.core.models.template import FeatureField, SpecField, Template
from src.dashboard.core.services.category_service import CategoryService

_feature_adapter = TypeAdapter(FeatureField)
_spec_adapter = TypeAdapter(SpecField)


def _field_input(
    identifier_attr: str,
    identifier: str,
    label: str,
    type: str,
    options: str | list[str] | None,
    required: bool,
    placeholder: str | None,
) -> dict[str, Any]:
    if not identifier.strip() or not label.strip():
        raise ValueError(f"{identifier_attr.capitalize()} and Label are required")
    return {
        identifier_attr: identifier.strip(),
        "label": label.strip(),
        "type": type,
        "options": options or [],
        "required": required,
        "placeholder": placeholder or None,
    }


class TemplateEditor:
    """Working copy of one template, saved back as a whole.

    The template for ``(category, None)`` is the default for every
    subcategory; selecting a subcategory edits its specialised template.
    """

    def __init__(self, service: CategoryService):
        self.service = service
        self.category: Category | None = None
        self.subcategory_id: str | None = None
        self.feature_fields: list = []
        self.spec_fields: list = []

    async def load(self, category_id: str, subcategory_id: str | None = None) -> Template:
        """Load the category and its template; a missing category propagates."""
        self.category = await self.service.get_category(category_id)
        if subcategory_id and self.category.find_subcategory(subcategory_id) is None:
            raise UnknownSelectionError(
                f"Subcategory '{subcategory_id}' does not belong to '{self.category.name}'"
            )
        self.subcategory_id = subcategory_id or None
        template = await self.service.get_feature_template(category_id, self.subcategory_id)
        self._adopt(template)
        return template

    def _adopt(self, template: Template) -> None:
        self.feature_fields = list(template.feature_fields)
        self.spec_fields = list(template.spec_fields)

    @property
    def template(self) -> Template:
        return Template(feature_fields=self.feature_fields, spec_fields=self.spec_fields)

    def add_feature(
        self,
        name: str,
        label: str,
        type: str = "text",
        options: str | list[str] | None = None,
        required: bool = False,
        placeholder: str | None = None,
    ):
        data = _field_input("name", name, label, type, options, required, placeholder)
        if data["name"] in {field.name for field in self.feature_fields}:
            raise ValueError(f"Feature '{data['name']}' already exists")
        field = _feature_adapter.validate_python(data)
        self.feature_fields.append(field)
        return field

    def add_spec(
        self,
        key: str,
        label: str,
        type: str = "text",
        options: str | list[str] | None = None,
        required: bool = False,
        placeholder: str | None = None,
    ):
        data = _field_input("key", key, label, type, options, required, placeholder)
        if data["key"] in {field.key for field in self.spec_fields}:
            raise ValueError(f"Specification '{data['key']}' already exists")
        field = _spec_adapter.validate_python(data)
        self.spec_fields.append(field)
        return field

    def remove_feature(self, name: str) -> None:
        remaining = [field for field in self.feature_fields if field.name != name]
        if len(remaining) == len(self.feature_fields):
            raise UnknownSelectionError(f"No feature named '{name}'")
        self.feature_fields = remaining

    def remove_spec(self, key: str) -> None:
        remaining = [field for field in self.spec_fields if field.key != key]
        if len(remaining) == len(self.spec_fields):
            raise UnknownSelectionError(f"No specification with key '{key}'")
        self.spec_fields = remaining

    def build_payload(self) -> dict[str, Any]:
        if self.category is None:
            raise RuntimeError("Load a category before saving its template")
        subcategory = (
            self.category.find_subcategory(self.subcategory_id) if self.subcategory_id else None
        )
        payload = self.template.to_payload()
        return {
            "subcategoryId": self.subcategory_id,
            "subcategoryName": subcategory.name if subcategory else None,
            "categoryName": self.category.name,
            "featureFields": payload["featureFields"],
            "specFields": payload["specFields"],
        }

    async def save(self) -> Template:
        """Post the template; the server's answer replaces the working copy when it has one."""
        payload = self.build_payload()
        response = await self.service.save_feature_template(self.category.id, payload)
        if isinstance(response, dict) and ("featureFields" in response or "specFields" in response):
            self._adopt(Template.model_validate(response))
        else:
            logger.debug("Template save returned no fields; keeping the working copy")
        logger.info(
            f"Saved template for {self.category.name}"
            + (f" / {self.subcategory_id}" if self.subcategory_id else "")
        )
        return self.template
