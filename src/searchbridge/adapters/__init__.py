"""Datasource adapter layer — Pluggable hooks around the Solr backend.

Built-in adapters:
  - solr_document: documents held by an external Solr collection

Implement ``DatasourceAdapter`` to plug another datasource into the
field-mapping, query and result hooks.
"""
