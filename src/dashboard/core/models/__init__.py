"""Domain models exports."""

from .catalog import Category, SelectionKey, Subcategory
from .product import ProductDraft
from .session import AdminSession
from .template import (
    CheckboxFeatureField,
    FieldKind,
    NumberFeatureField,
    NumberSpecField,
    SelectFeatureField,
    SelectSpecField,
    Template,
    TextFeatureField,
    TextSpecField,
    apply_template,
)

__all__ = [
    "AdminSession",
    "Category",
    "CheckboxFeatureField",
    "FieldKind",
    "NumberFeatureField",
    "NumberSpecField",
    "ProductDraft",
    "SelectFeatureField",
    "SelectSpecField",
    "SelectionKey",
    "Subcategory",
    "Template",
    "TextFeatureField",
    "TextSpecField",
    "apply_template",
]
