"""Tests for the adapter registry and hook dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from searchbridge.adapters.base.adapter import DatasourceAdapter
from searchbridge.adapters.base.exceptions import AdapterNotFoundError
from searchbridge.adapters.base.registry import AdapterRegistry, default_registry
from searchbridge.adapters.solr_document.adapter import SolrDocumentAdapter
from searchbridge.models.index import Index
from searchbridge.models.query import SearchQuery, SolrSelectQuery
from searchbridge.models.result import ResultSet


class RecordingAdapter(DatasourceAdapter):
    """Adapter for the local node datasource that records every hook call."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    @property
    def datasource_id(self) -> str:
        return "entity:node"

    def alter_field_mapping(self, index: Index, mapping: dict[str, str]) -> None:
        self.calls.append("field_mapping")

    def alter_query(self, solr_query: SolrSelectQuery, query: SearchQuery) -> None:
        self.calls.append("query")

    def alter_results(self, result_set: ResultSet, query: SearchQuery, response: dict[str, Any]) -> None:
        self.calls.append("results")


@pytest.fixture
def registry() -> AdapterRegistry:
    return AdapterRegistry()


class TestRegistration:
    def test_register_and_get(self, registry: AdapterRegistry) -> None:
        adapter = SolrDocumentAdapter()
        registry.register("solr_document", adapter)
        assert registry.get("solr_document") is adapter
        assert registry.registered_adapters == ["solr_document"]

    def test_get_unknown_raises(self, registry: AdapterRegistry) -> None:
        with pytest.raises(AdapterNotFoundError, match="Available adapters"):
            registry.get("missing")

    def test_unregister(self, registry: AdapterRegistry) -> None:
        registry.register("solr_document", SolrDocumentAdapter())
        registry.unregister("solr_document")
        assert registry.registered_adapters == []

    def test_unregister_unknown_raises(self, registry: AdapterRegistry) -> None:
        with pytest.raises(AdapterNotFoundError):
            registry.unregister("missing")

    def test_overwrite_keeps_single_entry(self, registry: AdapterRegistry) -> None:
        replacement = SolrDocumentAdapter()
        registry.register("solr_document", SolrDocumentAdapter())
        registry.register("solr_document", replacement)
        assert registry.get("solr_document") is replacement
        assert registry.registered_adapters == ["solr_document"]

    def test_default_registry(self) -> None:
        registry = default_registry()
        assert isinstance(registry.get("solr_document"), SolrDocumentAdapter)


class TestDispatch:
    def test_only_applicable_adapters_run(self, registry: AdapterRegistry, local_index: Index) -> None:
        recorder = RecordingAdapter()
        registry.register("solr_document", SolrDocumentAdapter())
        registry.register("node", recorder)

        mapping = {"search_api_id": "ss_search_api_id"}
        query = SearchQuery(index=local_index)
        registry.alter_field_mapping(local_index, mapping)
        registry.alter_query(SolrSelectQuery(), query)
        registry.alter_results(ResultSet(), query, {})

        assert recorder.calls == ["field_mapping", "query", "results"]
        assert mapping == {"search_api_id": "ss_search_api_id"}

    def test_applicable_in_registration_order(self, registry: AdapterRegistry, external_index: Index) -> None:
        solr = SolrDocumentAdapter()
        recorder = RecordingAdapter()
        registry.register("node", recorder)
        registry.register("solr_document", solr)
        assert registry.applicable(external_index) == [recorder, solr]

    def test_field_mapping_dispatched(self, registry: AdapterRegistry, external_index: Index) -> None:
        registry.register("solr_document", SolrDocumentAdapter())
        mapping = {"search_api_id": "ss_search_api_id", "title": "tm_title"}
        registry.alter_field_mapping(external_index, mapping)
        assert mapping == {"search_api_id": "uuid", "title": "title_s"}

    def test_filter_view_fields_chains_adapters(self, registry: AdapterRegistry) -> None:
        registry.register("node", RecordingAdapter())
        registry.register("solr_document", SolrDocumentAdapter())
        fields = {"search_api_datasource_x_solr_document": {}, "search_api_index_x": {}}
        assert registry.filter_view_fields(fields) == {"search_api_index_x": {}}

    def test_empty_registry_is_passthrough(self, registry: AdapterRegistry, external_index: Index) -> None:
        mapping = {"title": "tm_title"}
        registry.alter_field_mapping(external_index, mapping)
        assert mapping == {"title": "tm_title"}
