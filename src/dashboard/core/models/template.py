"""Feature and specification templates.

A template is the ordered set of dynamic form fields the backend declares for
a category, optionally specialised per subcategory. Field descriptors are a
closed tagged union over ``type``; an unknown kind fails validation instead of
silently rendering as text.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKind(str, Enum):
    """Every kind of dynamic input the dashboard knows how to render."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"


FieldValue = Union[str, bool]


class _FieldBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: ClassVar[FieldKind]

    label: str = Field(default="", description="Human readable label")
    required: bool = Field(default=False, description="Must be filled before submit")
    placeholder: str | None = Field(default=None, description="Input placeholder")

    @property
    def identifier(self) -> str:
        raise NotImplementedError

    def default_value(self) -> FieldValue:
        """Empty value for a freshly added field of this kind."""
        return False if self.kind is FieldKind.CHECKBOX else ""


class _SelectMixin(BaseModel):
    options: list[str] = Field(default_factory=list, description="Allowed choices")

    @field_validator("options", mode="before")
    @classmethod
    def _split_options(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [option.strip() for option in value.split(",") if option.strip()]
        return value


class _FeatureFieldBase(_FieldBase):
    name: str = Field(description="Key under which the value is stored")

    @property
    def identifier(self) -> str:
        return self.name


class TextFeatureField(_FeatureFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.TEXT
    type: Literal["text"] = "text"


class NumberFeatureField(_FeatureFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.NUMBER
    type: Literal["number"] = "number"


class SelectFeatureField(_SelectMixin, _FeatureFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.SELECT
    type: Literal["select"] = "select"


class CheckboxFeatureField(_FeatureFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.CHECKBOX
    type: Literal["checkbox"] = "checkbox"


FeatureField = Annotated[
    Union[TextFeatureField, NumberFeatureField, SelectFeatureField, CheckboxFeatureField],
    Field(discriminator="type"),
]


class _SpecFieldBase(_FieldBase):
    key: str = Field(description="Key under which the value is stored")

    @property
    def identifier(self) -> str:
        return self.key


class TextSpecField(_SpecFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.TEXT
    type: Literal["text"] = "text"


class NumberSpecField(_SpecFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.NUMBER
    type: Literal["number"] = "number"


class SelectSpecField(_SelectMixin, _SpecFieldBase):
    kind: ClassVar[FieldKind] = FieldKind.SELECT
    type: Literal["select"] = "select"


SpecField = Annotated[
    Union[TextSpecField, NumberSpecField, SelectSpecField],
    Field(discriminator="type"),
]

AnyField = Union[
    TextFeatureField,
    NumberFeatureField,
    SelectFeatureField,
    CheckboxFeatureField,
    TextSpecField,
    NumberSpecField,
    SelectSpecField,
]


def _default_type(items):
    # Fields saved without an explicit type are plain text inputs
    if not isinstance(items, list):
        return items
    return [
        {**item, "type": item.get("type") or "text"} if isinstance(item, dict) else item
        for item in items
    ]


class Template(BaseModel):
    """Feature and specification fields resolved for one selection key."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    feature_fields: list[FeatureField] = Field(
        default_factory=list, alias="featureFields"
    )
    spec_fields: list[SpecField] = Field(default_factory=list, alias="specFields")

    @field_validator("feature_fields", "spec_fields", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        if value is None:
            return []
        return _default_type(value)

    @classmethod
    def empty(cls) -> Template:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.feature_fields and not self.spec_fields

    @property
    def feature_names(self) -> list[str]:
        return [field.name for field in self.feature_fields]

    @property
    def spec_keys(self) -> list[str]:
        return [field.key for field in self.spec_fields]

    def to_payload(self) -> dict:
        """Serialize in the backend's camelCase shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


def apply_template(fields: list, existing_values: dict | None) -> dict[str, FieldValue]:
    """Build a value mapping with exactly one entry per field.

    Values are carried over by field identifier; anything keyed by an
    identifier the template does not declare is dropped. Missing values start
    at the field kind's default (``""``, or ``False`` for checkboxes).
    """
    existing_values = existing_values or {}
    values: dict[str, FieldValue] = {}
    for field in fields:
        if field.identifier in existing_values:
            values[field.identifier] = existing_values[field.identifier]
        else:
            values[field.identifier] = field.default_value()
    return values
