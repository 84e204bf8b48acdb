"""Query models — The logical search query and the outbound Solr select query."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from searchbridge.models.index import Index


class SearchQuery(BaseModel):
    """Logical query descriptor built by the index layer.

    The ``backend`` is the object executing the query. Adapters inspect it
    for field-name resolution but never call its I/O methods.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: Index = Field(description="Index the query runs against")
    keys: str | None = Field(default=None, description="Fulltext search keys")
    conditions: dict[str, Any] = Field(default_factory=dict, description="Field conditions (field id -> value)")
    offset: int = Field(default=0, ge=0, description="Index of the first result")
    limit: int = Field(default=10, ge=0, le=1000, description="Maximum number of results")
    backend: Any = Field(default=None, exclude=True, description="Backend executing the query")


class SolrSelectQuery(BaseModel):
    """Mutable outbound request for a Solr ``/select`` handler.

    Filter queries are kept by key so that individual clauses can be
    removed before the request is dispatched.
    """

    query: str = Field(default="", description="Main query string ('q')")
    filter_queries: dict[str, str] = Field(default_factory=dict, description="Filter clauses ('fq') by key")
    params: dict[str, Any] = Field(default_factory=dict, description="Additional request parameters")
    fields: list[str] = Field(default_factory=list, description="Requested field list ('fl')")
    start: int = Field(default=0, ge=0, description="Offset of the first document")
    rows: int = Field(default=10, ge=0, description="Number of documents to return")

    def get_query(self) -> str:
        return self.query

    def set_query(self, query: str) -> None:
        self.query = query

    def add_filter_query(self, key: str, clause: str) -> None:
        self.filter_queries[key] = clause

    def remove_filter_query(self, key: str) -> None:
        self.filter_queries.pop(key, None)

    def get_filter_query(self, key: str) -> str | None:
        return self.filter_queries.get(key)

    def add_param(self, key: str, value: Any) -> None:
        self.params[key] = value

    def get_param(self, key: str) -> Any:
        return self.params.get(key)

    def set_fields(self, fields: list[str]) -> None:
        self.fields = list(fields)

    def to_request_body(self) -> dict[str, Any]:
        """Render the query as a Solr JSON Request API body."""
        field_list = ",".join(dict.fromkeys([*self.fields, "score"])) if self.fields else "*,score"
        body: dict[str, Any] = {
            "query": self.query or "*:*",
            "offset": self.start,
            "limit": self.rows,
            "params": {"fl": field_list, **self.params},
        }
        if self.filter_queries:
            body["filter"] = list(self.filter_queries.values())
        return body
