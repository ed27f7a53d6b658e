"""Tests for interactive dynamic field input."""

import io

import pytest
from rich.console import Console

from src.dashboard.core.models.template import (
    CheckboxFeatureField,
    NumberSpecField,
    SelectFeatureField,
    TextFeatureField,
)
from src.dashboard.core.rendering import render_field, render_fields


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


@pytest.fixture
def answers(monkeypatch):
    """Queue the lines the user types."""
    queued: list[str] = []
    monkeypatch.setattr("builtins.input", lambda *args: queued.pop(0))
    return queued


class TestRenderField:
    """Test one renderer per field kind."""

    def test_text_keeps_current_value_on_enter(self, console, answers):
        """Test pressing enter keeps the existing text."""
        answers.append("")
        field = TextFeatureField(name="warranty", label="Warranty")

        assert render_field(field, "1 year", console) == "1 year"

    def test_required_text_asks_again(self, console, answers):
        """Test a required text input is repeated until filled."""
        answers.extend(["", "cotton"])
        field = TextFeatureField(name="material", label="Material", required=True)

        assert render_field(field, "", console) == "cotton"
        assert "required" in console.file.getvalue()

    def test_number_rejects_non_numeric(self, console, answers):
        """Test numeric inputs are validated but kept as entered."""
        answers.extend(["six", "6.1"])
        field = NumberSpecField(key="screen", label="Screen size")

        assert render_field(field, "", console) == "6.1"
        assert "number" in console.file.getvalue()

    def test_select_only_accepts_options(self, console, answers):
        """Test a select input only returns one of its options."""
        answers.extend(["6G", "5G"])
        field = SelectFeatureField(name="network", label="Network", options=["4G", "5G"])

        assert render_field(field, "", console) == "5G"

    def test_optional_select_may_stay_empty(self, console, answers):
        """Test an optional select accepts no choice."""
        answers.append("")
        field = SelectFeatureField(name="network", label="Network", options=["4G", "5G"])

        assert render_field(field, "", console) == ""

    def test_checkbox_returns_bool(self, console, answers):
        """Test checkbox input yields a boolean."""
        answers.append("y")
        field = CheckboxFeatureField(name="wireless", label="Wireless")

        assert render_field(field, False, console) is True


class TestRenderFields:
    """Test rendering a whole template section."""

    def test_fields_rendered_in_template_order(self, console, answers):
        """Test every field gets exactly one value keyed by its name."""
        answers.extend(["2 years", "n"])
        fields = [
            TextFeatureField(name="warranty", label="Warranty"),
            CheckboxFeatureField(name="wireless", label="Wireless"),
        ]

        values = render_fields(fields, {"warranty": "", "stale": "x"}, console)

        assert values == {"warranty": "2 years", "wireless": False}
