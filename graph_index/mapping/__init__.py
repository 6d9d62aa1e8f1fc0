"""Graph entity to search document mapping."""

from graph_index.mapping.config import MapperConfig
from graph_index.mapping.entity import Entity, EntityKind
from graph_index.mapping.mapper import DocumentMapper
from graph_index.mapping.synchronizer import IndexState, IndexSynchronizer
from graph_index.mapping.variants import (
    advanced_mapper,
    create_mapper,
    default_mapper,
    index_per_kind,
    single_index,
)

__all__ = [
    "MapperConfig",
    "Entity",
    "EntityKind",
    "DocumentMapper",
    "IndexState",
    "IndexSynchronizer",
    "advanced_mapper",
    "create_mapper",
    "default_mapper",
    "index_per_kind",
    "single_index",
]
