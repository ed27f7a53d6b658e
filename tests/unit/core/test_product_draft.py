"""Tests for the product draft model."""

import json

import pytest

from src.dashboard.core.errors import DraftValidationError
from src.dashboard.core.models.product import ProductDraft
from src.dashboard.core.models.template import Template


class TestFromProduct:
    """Test seeding drafts from backend products."""

    def test_backend_values_normalized(self):
        """Test numbers become form strings and missing values become blanks."""
        draft = ProductDraft.from_product(
            {
                "name": "Phone X",
                "price": 499.5,
                "originalPrice": None,
                "stock": 7,
                "rating": "4.5",
                "categoryId": "electronics",
                "features": {"warranty": "1 year", "wireless": True, "ports": 2},
            }
        )

        assert draft.price == "499.5"
        assert draft.original_price == ""
        assert draft.stock == 7
        assert draft.rating == 4.5
        assert draft.category_id == "electronics"
        assert draft.features == {"warranty": "1 year", "wireless": True, "ports": "2"}
        assert draft.specifications == {}

    def test_boolean_specifications_become_text(self):
        """Test stored boolean specifications still open as an edit draft."""
        draft = ProductDraft.from_product(
            {
                "name": "Watch",
                "categoryId": "electronics",
                "specifications": {"waterproof": True, "refurbished": False, "weight": 40},
            }
        )

        assert draft.specifications == {
            "waterproof": "true",
            "refurbished": "false",
            "weight": "40",
        }

    @pytest.mark.parametrize(
        "image, expected",
        [
            ("https://cdn.test/p.png", "https://cdn.test/p.png"),
            ("/uploads/p.png", ""),
            (None, ""),
        ],
    )
    def test_only_absolute_image_urls_kept(self, image, expected):
        """Test relative upload paths are not offered as image URLs."""
        assert ProductDraft.from_product({"image": image}).image_url == expected


class TestValidateAgainst:
    """Test submit-time validation."""

    def test_core_fields_required(self):
        """Test name, price and category are always required."""
        with pytest.raises(DraftValidationError) as excinfo:
            ProductDraft().validate_against(Template.empty())

        assert excinfo.value.missing == ["name", "price", "category_id"]

    def test_required_dynamic_fields(self, template_payloads):
        """Test required feature and specification values are checked."""
        template = Template.model_validate(template_payloads[("electronics", None)])
        draft = ProductDraft(
            name="Lamp", price="20", category_id="electronics",
            features={"warranty": "", "wireless": False},
            specifications={"power": " "},
        )

        with pytest.raises(DraftValidationError) as excinfo:
            draft.validate_against(template)

        assert excinfo.value.missing == ["specifications.power"]

    def test_unchecked_required_checkbox_is_valid(self):
        """Test a required checkbox may be left unchecked."""
        template = Template.model_validate(
            {"featureFields": [{"name": "tos", "label": "Terms", "type": "checkbox", "required": True}]}
        )
        draft = ProductDraft(
            name="Lamp", price="20", category_id="electronics", features={"tos": False}
        )

        draft.validate_against(template)


class TestToFormData:
    """Test the multipart representation."""

    def test_all_values_are_strings(self):
        """Test every form value is a string and maps are JSON encoded."""
        draft = ProductDraft(
            name="Phone X",
            category="Electronics",
            category_id="electronics",
            subcategory_id="phones",
            subcategory_name="Phones",
            brand="Apple",
            price="499",
            stock=3,
            features={"warranty": "1 year", "wireless": True},
            specifications={"screen": "6.1"},
        )

        data = draft.to_form_data()

        assert all(isinstance(value, str) for value in data.values())
        assert data["categoryId"] == "electronics"
        assert data["subcategoryName"] == "Phones"
        assert data["brand"] == "Apple"
        assert data["stock"] == "3"
        assert json.loads(data["features"]) == {"warranty": "1 year", "wireless": True}
        assert json.loads(data["specifications"]) == {"screen": "6.1"}
