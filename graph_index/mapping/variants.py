"""
Mapping variants.

A variant is a DocumentMapper wired with an index naming policy and
optional per-kind hooks:
- default: nodes and relationships share one index named after the prefix
- advanced: one index per kind, documents carry labels / relationship type
"""
from typing import Any, Callable, Dict, Mapping, Optional

from graph_index.mapping.entity import Entity, EntityKind
from graph_index.mapping.mapper import DocumentMapper
from graph_index.utils.exceptions import MapperConfigurationError

LABELS_FIELD = "labels"
TYPE_FIELD = "type"


def single_index(prefix: str, kind: EntityKind) -> str:
    return prefix


def index_per_kind(prefix: str, kind: EntityKind) -> str:
    return f"{prefix}-{kind.value}"


def add_node_labels(document: Dict[str, Any], entity: Entity) -> None:
    document[LABELS_FIELD] = sorted(entity.labels)


def add_relationship_type(document: Dict[str, Any], entity: Entity) -> None:
    document[TYPE_FIELD] = entity.type


def default_mapper() -> DocumentMapper:
    return DocumentMapper(single_index)


def advanced_mapper() -> DocumentMapper:
    return DocumentMapper(
        index_per_kind,
        extras={
            EntityKind.NODE: add_node_labels,
            EntityKind.RELATIONSHIP: add_relationship_type,
        },
    )


MAPPER_VARIANTS: Dict[str, Callable[[], DocumentMapper]] = {
    "default": default_mapper,
    "advanced": advanced_mapper,
}


def create_mapper(
    variant: str = "default",
    options: Optional[Mapping[str, Optional[str]]] = None,
) -> DocumentMapper:
    """
    Build and configure a mapper by variant name.

    Args:
        variant: "default" or "advanced"
        options: Raw mapper options passed to configure()

    Returns:
        Configured DocumentMapper

    Raises:
        MapperConfigurationError: If the variant is unknown
    """
    factory = MAPPER_VARIANTS.get(variant.strip().lower())
    if factory is None:
        raise MapperConfigurationError(
            f"Unknown mapping variant: {variant}",
            {"variant": variant, "available": sorted(MAPPER_VARIANTS)},
        )
    mapper = factory()
    mapper.configure(options)
    return mapper
