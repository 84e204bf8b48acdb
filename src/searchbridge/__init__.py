"""SearchBridge — Solr document datasource for a generic search index layer."""

__version__ = "0.1.0"
