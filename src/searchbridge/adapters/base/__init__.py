"""Base adapter interface — Abstract hooks for datasource-specific behavior."""

from searchbridge.adapters.base.adapter import DatasourceAdapter, FieldNameResolver
from searchbridge.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "DatasourceAdapter", "FieldNameResolver"]
