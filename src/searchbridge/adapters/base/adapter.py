"""Base datasource adapter — Abstract interface for datasource-specific hooks.

The Solr backend delegates three decisions to the adapters registered for
the index being operated on:
  1. Correcting the field-name mapping
  2. Amending the outbound select query before dispatch
  3. Post-processing the result set after the response is parsed

An adapter only acts on indexes that use its datasource; for every other
index each hook is a passthrough.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from searchbridge.models.index import Index
    from searchbridge.models.query import SearchQuery, SolrSelectQuery
    from searchbridge.models.result import ResultSet


@runtime_checkable
class FieldNameResolver(Protocol):
    """A backend able to resolve index fields to Solr field names."""

    def get_solr_field_names(self, index: Index) -> dict[str, str]: ...

    def get_configuration(self) -> dict[str, Any]: ...


class DatasourceAdapter(ABC):
    """Abstract base class for datasource adapters.

    All adapters must implement:
      - alter_field_mapping(): fix up field id -> Solr field name entries
      - alter_query(): amend the outbound query in place
      - alter_results(): enrich the result items in place

    ``filter_view_fields()`` is optional and defaults to a passthrough.
    """

    @property
    @abstractmethod
    def datasource_id(self) -> str:
        """Id of the datasource this adapter handles (e.g., 'solr_document')."""

    def applies_to(self, index: Index) -> bool:
        """Whether the index uses this adapter's datasource."""
        return index.is_valid_datasource(self.datasource_id)

    @abstractmethod
    def alter_field_mapping(self, index: Index, mapping: dict[str, str]) -> None:
        """Correct a field-name mapping in place.

        Args:
            index: The index the mapping was computed for.
            mapping: Field machine name -> Solr field name.
        """

    @abstractmethod
    def alter_query(self, solr_query: SolrSelectQuery, query: SearchQuery) -> None:
        """Amend the outbound query in place before it is dispatched.

        Args:
            solr_query: The outbound Solr select query.
            query: The logical query it was built from.
        """

    @abstractmethod
    def alter_results(self, result_set: ResultSet, query: SearchQuery, response: dict[str, Any]) -> None:
        """Post-process a completed result set in place.

        Args:
            result_set: Parsed results.
            query: The logical query that produced them.
            response: The raw Solr response body.
        """

    def filter_view_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Return the selectable display fields this datasource keeps."""
        return dict(fields)
