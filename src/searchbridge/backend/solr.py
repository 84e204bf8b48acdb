"""Apache Solr backend — Field-name resolution, query building and dispatch.

Connects to Apache Solr (v8+) using ``httpx`` (async) over the standard
JSON Request API. Datasource-specific behavior is delegated to the
adapters held by an ``AdapterRegistry``, which are invoked while the
field mapping is computed, before a query is dispatched and after its
results are parsed.

Usage::

    backend = SolrBackend(
        base_url="http://localhost:8983/solr",
        collection="documents",
        registry=default_registry(),
    )
    await backend.initialize()
    results = await backend.search(SearchQuery(index=index, keys="solar"))
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, Field

from searchbridge.adapters.base.exceptions import (
    ConnectionError,
    DocumentNotFoundError,
    QueryError,
)
from searchbridge.adapters.base.registry import AdapterRegistry
from searchbridge.models.query import SearchQuery, SolrSelectQuery
from searchbridge.models.result import RAW_DOCUMENT_KEY, ResultItem, ResultSet
from searchbridge.observability.logging import bind_search_context, clear_search_context

if TYPE_CHECKING:
    from searchbridge.config.settings import Settings
    from searchbridge.models.index import Index

logger = logging.getLogger(__name__)

RESERVED_FIELD_NAMES: dict[str, str] = {
    "search_api_id": "ss_search_api_id",
    "search_api_relevance": "score",
    "search_api_datasource": "ss_search_api_datasource",
    "search_api_language": "ss_search_api_language",
}

DYNAMIC_FIELD_PREFIXES: dict[str, str] = {
    "string": "ss_",
    "text": "tm_",
    "integer": "its_",
    "decimal": "fts_",
    "date": "ds_",
    "boolean": "bs_",
}


class BackendHealth(BaseModel):
    """Health status of the Solr backend."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SolrBackend:
    """Search backend for Apache Solr (v8+).

    Args:
        base_url: Solr base URL, e.g. ``"http://localhost:8983/solr"``.
        collection: Solr collection/core name.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: HTTP request timeout in seconds.
        retrieve_data: Request stored field values along with the results.
        site_hash: Hash scoping locally indexed documents to this install.
        registry: Datasource adapters to consult. Defaults to an empty registry.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8983/solr",
        collection: str = "documents",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        retrieve_data: bool = False,
        site_hash: str = "",
        registry: AdapterRegistry | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._collection = collection
        self._username = username
        self._password = password
        self._timeout = timeout
        self._retrieve_data = retrieve_data
        self._site_hash = site_hash
        self._registry = registry or AdapterRegistry()
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, registry: AdapterRegistry | None = None) -> SolrBackend:
        solr = settings.solr
        return cls(
            base_url=solr.base_url,
            collection=solr.collection,
            username=solr.username,
            password=solr.password,
            timeout=solr.timeout,
            retrieve_data=solr.retrieve_data,
            site_hash=solr.site_hash,
            registry=registry,
        )

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def get_configuration(self) -> dict[str, Any]:
        return {
            "base_url": self._base_url,
            "collection": self._collection,
            "timeout": self._timeout,
            "retrieve_data": self._retrieve_data,
            "site_hash": self._site_hash,
        }

    async def initialize(self) -> None:
        """Create an ``httpx.AsyncClient`` and ping the Solr admin API."""
        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )

        try:
            resp = await self._client.get(f"/{self._collection}/admin/ping")
            resp.raise_for_status()
            logger.info(
                "Connected to Solr collection '%s' at %s",
                self._collection,
                self._base_url,
            )
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to connect to Solr: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Field names ──────────────────────────────────────────────────────

    def get_solr_field_names(self, index: Index) -> dict[str, str]:
        """Resolve every index field to the Solr field storing it.

        Locally indexed fields live in dynamic fields named after their type;
        registered adapters may rewrite the mapping for their datasource.
        """
        mapping = dict(RESERVED_FIELD_NAMES)
        for field_id, field in index.get_fields().items():
            prefix = DYNAMIC_FIELD_PREFIXES.get(field.type, "ss_")
            mapping[field_id] = f"{prefix}{field_id}"
        self._registry.alter_field_mapping(index, mapping)
        return mapping

    # ── Search ───────────────────────────────────────────────────────────

    def build_select_query(self, query: SearchQuery, field_names: dict[str, str] | None = None) -> SolrSelectQuery:
        """Translate a logical query into an outbound select query.

        Args:
            query: The logical query.
            field_names: Mapping already resolved for the query's index, if any.
        """
        query = self._bind(query)
        index = query.index
        if field_names is None:
            field_names = self.get_solr_field_names(index)

        solr_query = SolrSelectQuery(
            query=query.keys or "",
            start=query.offset,
            rows=query.limit,
        )
        solr_query.add_filter_query("index_id", f"index_id:{_quote(index.index_id)}")
        if self._site_hash:
            solr_query.add_filter_query("site_hash", f"site_hash:{_quote(self._site_hash)}")

        for field_id, value in query.conditions.items():
            solr_field = field_names.get(field_id, field_id)
            solr_query.add_filter_query(field_id, f"{solr_field}:{_quote(value)}")

        self._registry.alter_query(solr_query, query)
        return solr_query

    async def search(self, query: SearchQuery) -> ResultSet:
        """Execute a search and return the post-processed result set."""
        if not self._client:
            raise ConnectionError("Solr client not initialized.")

        query = self._bind(query)
        index = query.index
        field_names = self.get_solr_field_names(index)
        solr_query = self.build_select_query(query, field_names)

        bind_search_context(index.index_id, self._collection)
        try:
            start = time.monotonic()
            resp = await self._client.post(
                f"/{self._collection}/select",
                json=solr_query.to_request_body(),
            )
            resp.raise_for_status()
            took_ms = int((time.monotonic() - start) * 1000)
            data = resp.json()

            result_set = self._parse_response(data, query, field_names)
            self._registry.alter_results(result_set, query, data)
            logger.info(
                "Search on index '%s' returned %d of %d results in %d ms",
                index.index_id,
                len(result_set.items),
                result_set.result_count,
                took_ms,
            )
            return result_set
        except httpx.HTTPError as e:
            raise QueryError(f"Solr query failed: {e}") from e
        finally:
            clear_search_context()

    async def fetch_document(self, doc_id: str) -> dict[str, Any]:
        """Retrieve a single document from Solr by its unique key."""
        if not self._client:
            raise ConnectionError("Solr client not initialized.")

        try:
            resp = await self._client.get(
                f"/{self._collection}/get",
                params={"id": doc_id},
            )
            resp.raise_for_status()
            data = resp.json()
            doc = data.get("doc")
            if doc is None:
                raise DocumentNotFoundError(f"Document '{doc_id}' not found.")
            return dict(doc)
        except DocumentNotFoundError:
            raise
        except httpx.HTTPError as e:
            raise QueryError(f"Failed to fetch document from Solr: {e}") from e

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> BackendHealth:
        """Ping the Solr admin endpoint."""
        if not self._client:
            return BackendHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get(f"/{self._collection}/admin/ping")
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                solr_status = resp.json().get("status", "unknown")
                return BackendHealth(
                    status="healthy" if solr_status == "OK" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Collection: {self._collection}, status: {solr_status}",
                )
            return BackendHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Solr returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return BackendHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    def _bind(self, query: SearchQuery) -> SearchQuery:
        if query.backend is self:
            return query
        return query.model_copy(update={"backend": self})

    def _parse_response(self, data: dict[str, Any], query: SearchQuery, field_names: dict[str, str]) -> ResultSet:
        response_section = data.get("response", {})
        highlighting = data.get("highlighting", {})
        id_field = field_names.get("search_api_id") or "id"

        result_set = ResultSet(query=query, result_count=response_section.get("numFound", 0))
        for doc in response_section.get("docs", []):
            item_id = _first_value(doc.get(id_field))
            if item_id is None:
                result_set.warnings.append(f"Skipped a document without '{id_field}'.")
                continue

            fields = {
                field_id: value if isinstance(value, list) else [value]
                for field_id, solr_field in field_names.items()
                if not field_id.startswith("search_api_") and (value := doc.get(solr_field)) is not None
            }
            fragments = highlighting.get(str(doc.get("id", item_id)), {})
            snippets = [s for values in fragments.values() if isinstance(values, list) for s in values]

            result_set.add_result_item(
                ResultItem(
                    id=str(item_id),
                    score=doc.get("score", 0.0),
                    excerpt=" ... ".join(snippets) if snippets else None,
                    fields=fields,
                    extra_data={RAW_DOCUMENT_KEY: doc},
                )
            )

        if result_set.warnings:
            logger.warning("%d documents lacked an identifier", len(result_set.warnings))
        return result_set


def _first_value(val: Any) -> Any:
    """Solr may return single-valued fields as lists; unwrap transparently."""
    if isinstance(val, list):
        return val[0] if val else None
    return val


def _quote(value: Any) -> str:
    """Quote a value for use in a Solr filter clause."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'
