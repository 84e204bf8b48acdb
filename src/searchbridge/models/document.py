"""Solr document wrapper — Typed access to a raw document from the external collection.

Result items coming from the ``solr_document`` datasource carry the raw
Solr document in their extra data. ``SolrDocumentFactory`` wraps it once
per item so the index layer never has to fetch the document again.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from searchbridge.models.index import SolrDocumentConfig

if TYPE_CHECKING:
    from searchbridge.models.result import ResultItem

logger = logging.getLogger(__name__)


class SolrDocument(BaseModel):
    """A document held by the external Solr collection."""

    id: str = Field(description="Identifier of the result item the document belongs to")
    fields: dict[str, Any] = Field(default_factory=dict, description="Raw Solr field values")
    datasource_config: SolrDocumentConfig = Field(default_factory=SolrDocumentConfig, description="Datasource settings")

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def first(self, name: str) -> Any:
        """Solr may return single-valued fields as lists; unwrap transparently."""
        value = self.fields.get(name)
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def get_label(self) -> str | None:
        return self._designated("label_field")

    def get_url(self) -> str | None:
        return self._designated("url_field")

    def get_language(self) -> str | None:
        return self._designated("language_field")

    def _designated(self, setting: str) -> str | None:
        field_name = getattr(self.datasource_config, setting)
        if not field_name:
            return None
        value = self.first(field_name)
        return None if value is None else str(value)


class SolrDocumentFactory:
    """Creates ``SolrDocument`` wrappers for result items.

    Wrappers are cached by item identifier, so asking twice for the same
    item returns the same object. Callers clear the cache between result
    sets, since identifiers are only unique within one response.
    """

    def __init__(self) -> None:
        self._cache: dict[str, SolrDocument] = {}

    def create(self, item: ResultItem, config: SolrDocumentConfig | None = None) -> SolrDocument:
        """Return the typed document for ``item``.

        Args:
            item: A result item carrying the raw Solr document.
            config: Datasource settings used for label/url/language lookup.

        Returns:
            The cached or newly created document wrapper.
        """
        document = self._cache.get(item.id)
        if document is None:
            document = SolrDocument(
                id=item.id,
                fields=item.get_raw_document(),
                datasource_config=config or SolrDocumentConfig(),
            )
            self._cache[item.id] = document
            logger.debug("Created Solr document wrapper for item %s", item.id)
        return document

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
