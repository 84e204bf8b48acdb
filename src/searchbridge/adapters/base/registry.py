"""Adapter Registry — Manages registration of datasource adapters and hook dispatch.

The registry keeps adapters in registration order. Each hook is forwarded
to every adapter that applies to the index being operated on, so indexes
without a matching datasource pass through untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from searchbridge.adapters.base.adapter import DatasourceAdapter
from searchbridge.adapters.base.exceptions import AdapterNotFoundError

if TYPE_CHECKING:
    from searchbridge.models.index import Index
    from searchbridge.models.query import SearchQuery, SolrSelectQuery
    from searchbridge.models.result import ResultSet

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry for datasource adapters.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register("solr_document", SolrDocumentAdapter())
        >>> registry.alter_field_mapping(index, mapping)
    """

    def __init__(self) -> None:
        self._adapters: dict[str, DatasourceAdapter] = {}

    def register(self, name: str, adapter: DatasourceAdapter) -> None:
        """Register an adapter instance.

        Args:
            name: Unique name for this adapter.
            adapter: The adapter to register.
        """
        if name in self._adapters:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._adapters[name] = adapter
        logger.info("Registered adapter: %s", name)

    def unregister(self, name: str) -> None:
        """Remove an adapter.

        Raises:
            AdapterNotFoundError: If no adapter is registered under this name.
        """
        if name not in self._adapters:
            raise AdapterNotFoundError(f"No adapter registered with name '{name}'.")
        del self._adapters[name]

    def get(self, name: str) -> DatasourceAdapter:
        """Get a registered adapter by name.

        Raises:
            AdapterNotFoundError: If no adapter is registered under this name.
        """
        if name not in self._adapters:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {list(self._adapters.keys())}"
            )
        return self._adapters[name]

    def applicable(self, index: Index) -> list[DatasourceAdapter]:
        """Adapters whose datasource the index uses, in registration order."""
        return [adapter for adapter in self._adapters.values() if adapter.applies_to(index)]

    # ── Hook dispatch ────────────────────────────────────────────────────

    def alter_field_mapping(self, index: Index, mapping: dict[str, str]) -> None:
        for adapter in self.applicable(index):
            adapter.alter_field_mapping(index, mapping)

    def alter_query(self, solr_query: SolrSelectQuery, query: SearchQuery) -> None:
        for adapter in self.applicable(query.index):
            adapter.alter_query(solr_query, query)

    def alter_results(self, result_set: ResultSet, query: SearchQuery, response: dict[str, Any]) -> None:
        for adapter in self.applicable(query.index):
            adapter.alter_results(result_set, query, response)

    def filter_view_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Run the view-field registry through every registered adapter."""
        for adapter in self._adapters.values():
            fields = adapter.filter_view_fields(fields)
        return fields

    @property
    def registered_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._adapters.keys())


def default_registry() -> AdapterRegistry:
    """Create a registry holding the built-in ``solr_document`` adapter."""
    from searchbridge.adapters.solr_document.adapter import SolrDocumentAdapter

    registry = AdapterRegistry()
    registry.register("solr_document", SolrDocumentAdapter())
    return registry
