"""Indexing services."""

from graph_index.services.indexer import EntityIndexer, IndexingReport

__all__ = ["EntityIndexer", "IndexingReport"]
