"""
Graph entities as seen by the document mapper.

Nodes and relationships are both reduced to a kind plus a read-only
property map. The mapper never talks to the driver objects directly.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from neo4j.graph import Node, Relationship


class EntityKind(str, Enum):
    """Kind of graph entity a document is built from."""

    NODE = "node"
    RELATIONSHIP = "relationship"


@dataclass(frozen=True)
class Entity:
    """
    A node or relationship and its properties.

    Attributes:
        kind: Node or relationship
        properties: Property name -> value (scalar or list of scalars)
        element_id: Driver-assigned id, informational only
        labels: Node labels (empty for relationships)
        type: Relationship type (None for nodes)
    """

    kind: EntityKind
    properties: Mapping[str, Any] = field(default_factory=dict)
    element_id: Optional[str] = None
    labels: Tuple[str, ...] = ()
    type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties or {})))

    def __hash__(self):
        # properties is a mapping proxy and cannot be hashed
        return hash((self.kind, self.element_id))

    def get_properties(self) -> Mapping[str, Any]:
        return self.properties

    @classmethod
    def node(cls, properties: Dict[str, Any], labels=(), element_id: Optional[str] = None) -> "Entity":
        return cls(EntityKind.NODE, properties, element_id, tuple(labels))

    @classmethod
    def relationship(cls, properties: Dict[str, Any], type: str, element_id: Optional[str] = None) -> "Entity":
        return cls(EntityKind.RELATIONSHIP, properties, element_id, (), type)

    @classmethod
    def from_neo4j(cls, item: Any) -> "Entity":
        """
        Build an entity from a neo4j driver graph object.

        Args:
            item: neo4j.graph.Node or neo4j.graph.Relationship

        Returns:
            Entity carrying a copy of the item's properties

        Raises:
            TypeError: If item is neither a node nor a relationship
        """
        if isinstance(item, Node):
            return cls.node(dict(item.items()), labels=sorted(item.labels), element_id=item.element_id)
        if isinstance(item, Relationship):
            return cls.relationship(dict(item.items()), type=item.type, element_id=item.element_id)
        raise TypeError(f"Cannot build an entity from {type(item).__name__}")
