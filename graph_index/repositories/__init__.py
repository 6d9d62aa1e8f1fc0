"""Repository layer - search index and graph access."""

from graph_index.repositories.entity_source import GraphEntitySource
from graph_index.repositories.index_client import (
    CreateIndexResult,
    ElasticsearchIndexClient,
    SearchIndexClient,
)

__all__ = [
    "GraphEntitySource",
    "CreateIndexResult",
    "ElasticsearchIndexClient",
    "SearchIndexClient",
]
