"""Solr document adapter — Treat an external Solr collection's documents as index content.

The external collection was not populated by this index layer, so the
defaults the backend assumes for locally indexed content do not hold:

  - fields are stored under their original Solr names, not generated aliases
  - documents carry no ``site_hash`` / ``index_id`` scoping values
  - identifiers lack the ``<datasource>/<id>`` shape used everywhere else

Usage::

    registry = AdapterRegistry()
    registry.register("solr_document", SolrDocumentAdapter())
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from searchbridge.adapters.base.adapter import DatasourceAdapter, FieldNameResolver
from searchbridge.models.document import SolrDocumentFactory
from searchbridge.models.index import SOLR_DOCUMENT_DATASOURCE

if TYPE_CHECKING:
    from searchbridge.models.index import Index
    from searchbridge.models.query import SearchQuery, SolrSelectQuery
    from searchbridge.models.result import ResultSet

logger = logging.getLogger(__name__)

RESERVED_FIELD_PREFIX = "search_api_"
ID_FIELD_KEY = "search_api_id"
SCOPING_FILTERS = ("site_hash", "index_id")
VIEW_FIELD_PATTERN = re.compile(r"^search_api_datasource_(.+)_solr_document$")


class SolrDocumentAdapter(DatasourceAdapter):
    """Hooks for the ``solr_document`` datasource.

    Args:
        document_factory: Factory building typed wrappers for result items.
            A private factory is created when omitted.
    """

    def __init__(self, document_factory: SolrDocumentFactory | None = None) -> None:
        self._document_factory = document_factory or SolrDocumentFactory()

    @property
    def datasource_id(self) -> str:
        return SOLR_DOCUMENT_DATASOURCE

    @property
    def document_factory(self) -> SolrDocumentFactory:
        return self._document_factory

    # ── Field mapping ────────────────────────────────────────────────────

    def alter_field_mapping(self, index: Index, mapping: dict[str, str]) -> None:
        """Map datasource fields back to their original Solr names."""
        if not self.applies_to(index):
            return
        config = index.solr_document_config()
        mapping[ID_FIELD_KEY] = config.id_field

        for field_id in list(mapping):
            if field_id.startswith(RESERVED_FIELD_PREFIX):
                continue
            field = index.get_field(field_id)
            if field is None or field.datasource_id != self.datasource_id:
                continue
            mapping[field_id] = field.property_path

    # ── Query ────────────────────────────────────────────────────────────

    def alter_query(self, solr_query: SolrSelectQuery, query: SearchQuery) -> None:
        """Drop local scoping filters and apply the datasource's query settings."""
        index = query.index
        if not self.applies_to(index):
            return
        config = index.solr_document_config()

        for key in SCOPING_FILTERS:
            solr_query.remove_filter_query(key)

        if config.request_handler:
            solr_query.add_param("qt", config.request_handler)

        if not solr_query.get_query() and config.default_query:
            solr_query.set_query(config.default_query)

        backend = query.backend
        if isinstance(backend, FieldNameResolver) and backend.get_configuration().get("retrieve_data"):
            field_names = [*backend.get_solr_field_names(index).values(), *config.extra_fields()]
            solr_query.set_fields(list(dict.fromkeys(name for name in field_names if name)))
            logger.debug("Requesting %d fields from index %s", len(solr_query.fields), index.index_id)

    # ── Results ──────────────────────────────────────────────────────────

    def alter_results(self, result_set: ResultSet, query: SearchQuery, response: dict[str, Any]) -> None:
        """Attach typed documents and qualify item ids with the datasource."""
        index = query.index
        if not self.applies_to(index):
            return
        config = index.solr_document_config()
        prefix = f"{self.datasource_id}/"
        # Wrappers belong to this result set only
        self._document_factory.clear()

        for item in result_set.get_result_items():
            document = self._document_factory.create(item, config)
            if item.id.startswith(prefix):
                new_id = item.id
            else:
                new_id = prefix + item.id
            result_set.replace_result_item(item.id, item.with_id(new_id, original_object=document))

    # ── Views ────────────────────────────────────────────────────────────

    def filter_view_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Drop the raw datasource entries so fields are not offered twice."""
        return {key: value for key, value in fields.items() if not VIEW_FIELD_PATTERN.match(key)}
