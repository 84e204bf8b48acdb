"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from searchbridge.adapters.solr_document.adapter import SolrDocumentAdapter
from searchbridge.config.settings import Settings
from searchbridge.models.document import SolrDocumentFactory
from searchbridge.models.index import Datasource, Index, IndexField
from searchbridge.models.result import RAW_DOCUMENT_KEY, ResultItem, ResultSet


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        observability={"debug": True},
        solr={"collection": "external_docs", "retrieve_data": True, "site_hash": "abc123"},
    )


@pytest.fixture
def solr_document_config() -> dict[str, Any]:
    return {
        "id_field": "uuid",
        "request_handler": "/external",
        "default_query": "type_s:article",
        "language_field": "lang_s",
        "label_field": "title_s",
        "url_field": "url_s",
    }


@pytest.fixture
def external_index(solr_document_config: dict[str, Any]) -> Index:
    """Index combining the Solr document datasource with local node content."""
    return Index(
        index_id="external",
        name="External documents",
        datasources={
            "solr_document": Datasource(datasource_id="solr_document", configuration=solr_document_config),
            "entity:node": Datasource(datasource_id="entity:node"),
        },
        fields={
            "title": IndexField(field_id="title", datasource_id="solr_document", property_path="title_s", type="text"),
            "body": IndexField(field_id="body", datasource_id="solr_document", property_path="body_txt", type="text"),
            "created": IndexField(
                field_id="created", datasource_id="solr_document", property_path="created_dt", type="date"
            ),
            "node_title": IndexField(field_id="node_title", datasource_id="entity:node", property_path="title"),
        },
    )


@pytest.fixture
def local_index() -> Index:
    """Index holding only locally indexed node content."""
    return Index(
        index_id="local",
        datasources={"entity:node": Datasource(datasource_id="entity:node")},
        fields={
            "title": IndexField(field_id="title", datasource_id="entity:node", property_path="title"),
            "nid": IndexField(field_id="nid", datasource_id="entity:node", property_path="nid", type="integer"),
        },
    )


@pytest.fixture
def document_factory() -> SolrDocumentFactory:
    return SolrDocumentFactory()


@pytest.fixture
def adapter(document_factory: SolrDocumentFactory) -> SolrDocumentAdapter:
    return SolrDocumentAdapter(document_factory=document_factory)


@pytest.fixture
def sample_result_set() -> ResultSet:
    """Two results as parsed from an external Solr collection."""
    result_set = ResultSet(result_count=2)
    result_set.add_result_item(
        ResultItem(
            id="abc-1",
            score=2.5,
            extra_data={
                RAW_DOCUMENT_KEY: {
                    "uuid": "abc-1",
                    "title_s": "Solar Energy Forecasting Methods",
                    "url_s": "https://example.com/solar",
                    "lang_s": ["en"],
                }
            },
        )
    )
    result_set.add_result_item(
        ResultItem(
            id="abc-2",
            score=1.0,
            extra_data={RAW_DOCUMENT_KEY: {"uuid": "abc-2", "title_s": "Wind Turbines"}},
        )
    )
    return result_set
