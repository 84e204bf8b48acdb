"""Result models — Result items and result sets returned by a search.

Result items are keyed by identifier inside a ``ResultSet``. Identifiers
are fixed at construction; re-identifying an item means building a copy
with ``ResultItem.with_id()`` and swapping it in with
``ResultSet.replace_result_item()``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from searchbridge.models.document import SolrDocument
from searchbridge.models.query import SearchQuery

RAW_DOCUMENT_KEY = "search_api_solr_document"


class ResultItem(BaseModel):
    """A single matched record.

    Identifiers produced for the index layer have the form
    ``<datasource_id>/<entity_id>``; ``datasource_id`` reads the prefix.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(frozen=True, description="Item identifier")
    score: float = Field(default=0.0, description="Relevance score")
    excerpt: str | None = Field(default=None, description="Highlighted excerpt")
    fields: dict[str, list[Any]] = Field(default_factory=dict, description="Extracted field values by field id")
    extra_data: dict[str, Any] = Field(default_factory=dict, description="Backend-specific data")
    original_object: SolrDocument | None = Field(default=None, description="Typed underlying document")

    @property
    def datasource_id(self) -> str | None:
        prefix, sep, _ = self.id.partition("/")
        return prefix if sep else None

    def with_id(self, item_id: str, **update: Any) -> ResultItem:
        """Return a copy of this item carrying a different identifier."""
        return self.model_copy(update={"id": item_id, **update})

    def get_raw_document(self) -> dict[str, Any]:
        return dict(self.extra_data.get(RAW_DOCUMENT_KEY) or {})


class ResultSet(BaseModel):
    """The results of a search, in ranking order."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    query: SearchQuery | None = Field(default=None, description="Query that produced the results")
    result_count: int = Field(default=0, description="Total number of matches")
    items: dict[str, ResultItem] = Field(default_factory=dict, description="Result items by identifier")
    extra_data: dict[str, Any] = Field(default_factory=dict, description="Backend-specific data")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal warnings")

    def get_result_items(self) -> list[ResultItem]:
        return list(self.items.values())

    def add_result_item(self, item: ResultItem) -> None:
        self.items[item.id] = item

    def replace_result_item(self, old_id: str, item: ResultItem) -> None:
        """Replace the item stored under ``old_id``, keeping ranking order.

        Raises:
            KeyError: If no item is stored under ``old_id``.
            ValueError: If another item is already stored under the new id.
        """
        if old_id not in self.items:
            raise KeyError(old_id)
        if item.id != old_id and item.id in self.items:
            raise ValueError(f"Result set already contains an item with id '{item.id}'")
        self.items = {
            (item.id if key == old_id else key): (item if key == old_id else existing)
            for key, existing in self.items.items()
        }
