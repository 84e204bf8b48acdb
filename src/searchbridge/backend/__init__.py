"""Search backends dispatching queries to a Solr server."""

from searchbridge.backend.solr import BackendHealth, SolrBackend

__all__ = ["BackendHealth", "SolrBackend"]
