"""Index models — Datasources, fields and the Solr document datasource settings.

An index aggregates one or more datasources (logical content sources) and a
set of fields. Every field is tagged with the datasource it originates from
and a property path locating the underlying value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from searchbridge.adapters.base.exceptions import DatasourceNotFoundError

SOLR_DOCUMENT_DATASOURCE = "solr_document"

FIELD_TYPES = ("string", "text", "integer", "decimal", "date", "boolean")


class SolrDocumentConfig(BaseModel):
    """Settings of the ``solr_document`` datasource within an index.

    Missing keys default to empty strings; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id_field: str = Field(default="", description="Solr field holding the unique document identifier")
    request_handler: str = Field(default="", description="Named Solr request handler sent as 'qt'")
    default_query: str = Field(default="", description="Query string used when the search has no keys")
    language_field: str = Field(default="", description="Solr field holding the document language")
    label_field: str = Field(default="", description="Solr field holding the document label")
    url_field: str = Field(default="", description="Solr field holding the document URL")

    def extra_fields(self) -> list[str]:
        """Configured extra field designators, in language/label/url order."""
        return [f for f in (self.language_field, self.label_field, self.url_field) if f]


class IndexField(BaseModel):
    """A single indexed field."""

    field_id: str = Field(description="Machine name of the field")
    datasource_id: str | None = Field(default=None, description="Owning datasource (None for index-wide fields)")
    property_path: str = Field(description="Path of the underlying property within the datasource item")
    type: str = Field(default="string", description=f"Field type, one of {', '.join(FIELD_TYPES)}")
    label: str | None = Field(default=None, description="Human-readable label")


class Datasource(BaseModel):
    """A datasource attached to an index, with its key-value configuration."""

    datasource_id: str = Field(description="Datasource plugin id, e.g. 'solr_document'")
    configuration: dict[str, Any] = Field(default_factory=dict, description="Datasource settings")

    def get_configuration(self) -> dict[str, Any]:
        return dict(self.configuration)


class Index(BaseModel):
    """A named search index configuration.

    Example:
        >>> index = Index(
        ...     index_id="external",
        ...     datasources={"solr_document": Datasource(
        ...         datasource_id="solr_document",
        ...         configuration={"id_field": "uuid"},
        ...     )},
        ...     fields={"title": IndexField(
        ...         field_id="title", datasource_id="solr_document", property_path="title_s",
        ...     )},
        ... )
        >>> index.is_valid_datasource("solr_document")
        True
    """

    index_id: str = Field(description="Machine name of the index")
    name: str = Field(default="", description="Human-readable index name")
    datasources: dict[str, Datasource] = Field(default_factory=dict, description="Datasources by id")
    fields: dict[str, IndexField] = Field(default_factory=dict, description="Indexed fields by machine name")

    @model_validator(mode="after")
    def _check_field_datasources(self) -> Index:
        for field_id, field in self.fields.items():
            if field.datasource_id is not None and field.datasource_id not in self.datasources:
                raise ValueError(
                    f"Field '{field_id}' refers to unknown datasource '{field.datasource_id}'"
                )
        return self

    def get_datasource_ids(self) -> list[str]:
        return list(self.datasources.keys())

    def get_datasources(self) -> dict[str, Datasource]:
        return dict(self.datasources)

    def get_datasource(self, datasource_id: str) -> Datasource:
        """Return the datasource with the given id.

        Raises:
            DatasourceNotFoundError: If the index does not use this datasource.
        """
        try:
            return self.datasources[datasource_id]
        except KeyError:
            raise DatasourceNotFoundError(
                f"Index '{self.index_id}' has no datasource '{datasource_id}'"
            ) from None

    def is_valid_datasource(self, datasource_id: str) -> bool:
        return datasource_id in self.datasources

    def get_fields(self) -> dict[str, IndexField]:
        return dict(self.fields)

    def get_field(self, field_id: str) -> IndexField | None:
        return self.fields.get(field_id)

    def solr_document_config(self) -> SolrDocumentConfig:
        """Typed configuration of the ``solr_document`` datasource.

        Raises:
            DatasourceNotFoundError: If the index does not use the datasource.
        """
        datasource = self.get_datasource(SOLR_DOCUMENT_DATASOURCE)
        return SolrDocumentConfig.model_validate(datasource.get_configuration())
