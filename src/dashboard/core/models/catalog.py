"""Category and subcategory models as served by ``GET /categories``."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class Subcategory(BaseModel):
    """A subcategory embedded in its parent category's payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Subcategory identifier")
    name: str = Field(description="Display name")
    description: str | None = Field(default=None, description="Free-text description")
    image: str | None = Field(default=None, description="Image URL")


class Category(BaseModel):
    """A product category owning an ordered list of subcategories."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Category identifier")
    name: str = Field(description="Display name")
    description: str | None = Field(default=None, description="Free-text description")
    image: str | None = Field(default=None, description="Image URL")
    icon: str | None = Field(default=None, description="Icon or emoji label")
    subcategories: list[Subcategory] = Field(
        default_factory=list, description="Subcategories in display order"
    )

    def find_subcategory(self, subcategory_id: str) -> Subcategory | None:
        for subcategory in self.subcategories:
            if subcategory.id == subcategory_id:
                return subcategory
        return None


@dataclass(frozen=True)
class SelectionKey:
    """The (category, subcategory) pair a template or brand request belongs to."""

    category_id: str | None = None
    subcategory_id: str | None = None

    @property
    def is_complete(self) -> bool:
        """Both ids are set, so a brand list applies."""
        return bool(self.category_id and self.subcategory_id)
