"""Data models for indexes, queries, results and Solr documents."""
