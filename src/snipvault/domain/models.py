"""Entity models — Category, Item and the Snapshot document.

Models are frozen; mutation always goes through ``model_copy(update=...)``
so that every operation produces a new snapshot.  Field names are
snake_case in Python and camelCase in the persisted document
(``createdAt``, ``updatedAt``, ``categoryId``).

The item collection is written under ``items``.  Older documents that
stored it under ``prompts`` are still accepted on input.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Self

from pydantic import AliasChoices, BaseModel, Field
from pydantic.alias_generators import to_camel

UNCATEGORIZED = ""


class Category(BaseModel):
    """A user-defined group of items."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    id: str
    name: str
    created_at: int = 0
    updated_at: int = 0
    order: int = 0


class Item(BaseModel):
    """A reusable text snippet.

    ``category_id == ""`` means the item is uncategorized.
    """

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    id: str
    title: str = ""
    text: str = ""
    category_id: str = UNCATEGORIZED
    favorite: bool = False
    order: int = 0
    created_at: int = 0
    updated_at: int = 0


class Snapshot(BaseModel):
    """The complete ``{categories, items}`` document, persisted as one unit."""

    model_config = {"frozen": True, "populate_by_name": True}

    categories: list[Category] = Field(default_factory=list)
    items: list[Item] = Field(
        default_factory=list,
        validation_alias=AliasChoices("items", "prompts"),
        serialization_alias="items",
    )

    @classmethod
    def from_document(cls, data: Any) -> Self:
        """Validate a decoded JSON document into a Snapshot.

        Raises:
            pydantic.ValidationError: If the document does not match the schema.
        """
        return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase document form."""
        return self.model_dump(by_alias=True, mode="json")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def category(self, category_id: str) -> Category | None:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None

    def item(self, item_id: str) -> Item | None:
        for it in self.items:
            if it.id == item_id:
                return it
        return None

    def category_by_name(self, name: str) -> Category | None:
        """Find a category by name, case-insensitively."""
        wanted = name.casefold()
        for cat in self.categories:
            if cat.name.casefold() == wanted:
                return cat
        return None

    def max_category_order(self) -> int:
        return max((cat.order for cat in self.categories), default=0)

    def max_item_order(self, category_id: str) -> int:
        """Highest item order among siblings in *category_id*'s scope."""
        return max(
            (it.order for it in self.items if it.category_id == category_id),
            default=0,
        )

    def duplicate_ids(self) -> list[str]:
        """Return ids that appear more than once within either collection."""
        dupes: list[str] = []
        for counter in (
            Counter(cat.id for cat in self.categories),
            Counter(it.id for it in self.items),
        ):
            dupes.extend(sorted(key for key, n in counter.items() if n > 1))
        return dupes
