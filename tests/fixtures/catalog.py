from __future__ import annotations

from typing import Any

import pytest

from src.dashboard.core.models.catalog import Category
from tests.utils import FakeCatalog


@pytest.fixture
def category_payloads() -> list[dict[str, Any]]:
    return [
        {
            "_id": "electronics",
            "name": "Electronics",
            "icon": "🔌",
            "subcategories": [
                {"_id": "phones", "name": "Phones"},
                {"_id": "laptops", "name": "Laptops"},
            ],
        },
        {
            "_id": "fashion",
            "name": "Fashion",
            "icon": "👕",
            "subcategories": [{"_id": "shirts", "name": "Shirts"}],
        },
        {"_id": "books", "name": "Books", "subcategories": []},
    ]


@pytest.fixture
def categories(category_payloads: list[dict[str, Any]]) -> list[Category]:
    return [Category.model_validate(payload) for payload in category_payloads]


@pytest.fixture
def template_payloads() -> dict[tuple[str, str | None], dict[str, Any]]:
    """Templates keyed by (category, subcategory) as the backend serves them."""
    return {
        ("electronics", None): {
            "featureFields": [
                {"name": "warranty", "label": "Warranty", "type": "text"},
                {"name": "wireless", "label": "Wireless", "type": "checkbox"},
            ],
            "specFields": [
                {"key": "power", "label": "Power (W)", "type": "number", "required": True},
            ],
        },
        ("electronics", "phones"): {
            "featureFields": [
                {"name": "warranty", "label": "Warranty", "type": "text"},
                {
                    "name": "network",
                    "label": "Network",
                    "type": "select",
                    "options": ["4G", "5G"],
                    "required": True,
                },
            ],
            "specFields": [
                {"key": "screen", "label": "Screen size", "type": "number"},
            ],
        },
        ("electronics", "laptops"): {
            "featureFields": [{"name": "backlit", "label": "Backlit keys", "type": "checkbox"}],
            "specFields": [{"key": "ram", "label": "RAM", "type": "select", "options": ["8GB", "16GB"]}],
        },
        ("fashion", None): {
            "featureFields": [
                {"name": "material", "label": "Material", "type": "text", "required": True},
                {"name": "care", "label": "Care instructions", "type": "text"},
            ],
            "specFields": [{"key": "size", "label": "Size", "type": "select", "options": ["S", "M", "L"]}],
        },
        ("fashion", "shirts"): {"featureFields": [], "specFields": []},
    }


@pytest.fixture
def brand_payloads() -> dict[tuple[str, str], list[str]]:
    return {
        ("electronics", "phones"): ["Apple", "Samsung"],
        ("electronics", "laptops"): ["Lenovo"],
        ("fashion", "shirts"): [],
    }


@pytest.fixture
def catalog(categories, template_payloads, brand_payloads) -> FakeCatalog:
    return FakeCatalog(categories, template_payloads, brand_payloads)
