"""Adapter for documents held by an external Solr collection."""

from searchbridge.adapters.solr_document.adapter import SolrDocumentAdapter

__all__ = ["SolrDocumentAdapter"]
