"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the backend cannot connect to the Solr server."""


class DocumentNotFoundError(AdapterError):
    """Raised when a requested document does not exist."""


class QueryError(AdapterError):
    """Raised when a search query fails."""


class ConfigurationError(AdapterError):
    """Raised when adapter or backend configuration is invalid."""


class DatasourceNotFoundError(AdapterError):
    """Raised when an index does not contain the requested datasource."""


class AdapterNotFoundError(AdapterError):
    """Raised when a requested adapter is not registered."""
