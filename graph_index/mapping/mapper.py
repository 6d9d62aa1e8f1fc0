"""
Document mapper.

Turns graph entities into Elasticsearch documents:
- every property except the key property is copied
- list properties are copied element-wise
- values are optionally forced to strings
- a per-kind hook may add or override fields afterwards

The key property value becomes the document ID (see get_key).
"""
import threading
from typing import Any, Callable, Dict, Mapping, Optional

from neo4j.spatial import Point

from graph_index.mapping.config import MapperConfig
from graph_index.mapping.entity import Entity, EntityKind
from graph_index.utils.exceptions import (
    ConfigurationNotInitializedError,
    MapperConfigurationError,
    UnsupportedPropertyError,
)
from graph_index.utils.logging import get_logger
from graph_index.utils.metrics import documents_mapped_total

logger = get_logger(__name__)

# (index_prefix, kind) -> index name
IndexNamePolicy = Callable[[str, EntityKind], str]

# Mutates the document in place; runs after the property copy
ExtraHook = Callable[[Dict[str, Any], Entity], None]

# Neo4j byte arrays arrive as bytearray and are flattened like any other array.
# Spatial points subclass tuple but are scalars.
_SEQUENCE_TYPES = (list, tuple, bytes, bytearray)
_UNSUPPORTED_TYPES = (dict, set, frozenset)


def stringify(value: Any) -> str:
    """String form used for document IDs and forced-string values."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DocumentMapper:
    """
    Maps nodes and relationships to search documents.

    The index naming policy is required; the extra hooks and the inclusion
    policy bypass flag are what distinguish one mapping variant from another.
    """

    def __init__(
        self,
        index_policy: IndexNamePolicy,
        extras: Optional[Mapping[EntityKind, ExtraHook]] = None,
        bypass_inclusion_policies: bool = False,
    ):
        """
        Args:
            index_policy: Resolves the index name for an entity kind
            extras: Optional hook per entity kind, called after the base copy
            bypass_inclusion_policies: Whether documents of this mapper skip
                inclusion policy filtering
        """
        self._index_policy = index_policy
        self._extras: Dict[EntityKind, ExtraHook] = dict(extras or {})
        self._bypass_inclusion_policies = bypass_inclusion_policies
        self._config: Optional[MapperConfig] = None
        self._lock = threading.Lock()

    def configure(self, options: Optional[Mapping[str, Optional[str]]] = None) -> MapperConfig:
        """
        Configure the mapper from raw string options.

        Args:
            options: "index", "keyProperty", "forceStrings"; blanks fall back to defaults

        Returns:
            The effective configuration

        Raises:
            MapperConfigurationError: If the mapper was already configured
        """
        config = MapperConfig.from_options(options)
        with self._lock:
            if self._config is not None:
                raise MapperConfigurationError(
                    "Mapper is already configured",
                    {"current": self._config.model_dump()},
                )
            self._config = config
        return config

    @property
    def config(self) -> MapperConfig:
        if self._config is None:
            raise ConfigurationNotInitializedError(
                "Mapper used before configure() was called", {}
            )
        return self._config

    @property
    def index_prefix(self) -> str:
        return self.config.index_prefix

    def get_key_property(self) -> str:
        """Property used as document ID (usually "uuid")."""
        return self.config.key_property

    def get_key(self, entity: Entity) -> str:
        """
        Document ID for an entity.

        A missing key property yields the string "null", which is still a
        valid document ID. Callers writing documents should treat it as suspect.
        """
        key_property = self.get_key_property()
        value = (entity.get_properties() or {}).get(key_property)
        if value is None:
            logger.debug(
                f"Entity {entity.element_id} has no '{key_property}' property, using 'null' as key"
            )
        return stringify(value)

    def normalize(self, value: Any) -> Any:
        return stringify(value) if self.config.force_strings else value

    def map_to_document(self, entity: Entity) -> Dict[str, Any]:
        """
        Create a search document from a node or relationship.

        Includes all properties except the key property, which is already
        the document ID.

        Args:
            entity: The node or relationship to build the document for

        Returns:
            Field name -> normalized value

        Raises:
            UnsupportedPropertyError: If a property holds a map or nested list
        """
        key_property = self.get_key_property()
        document: Dict[str, Any] = {}

        for name, value in (entity.get_properties() or {}).items():
            if name == key_property:
                continue
            document[name] = self._map_value(name, value)

        extra = self._extras.get(entity.kind)
        if extra is not None:
            extra(document, entity)

        documents_mapped_total.labels(entity_kind=entity.kind.value).inc()
        return document

    def _map_value(self, name: str, value: Any) -> Any:
        if isinstance(value, _UNSUPPORTED_TYPES):
            raise UnsupportedPropertyError(
                f"Property '{name}' has unsupported type {type(value).__name__}",
                {"property": name},
            )
        if isinstance(value, _SEQUENCE_TYPES) and not isinstance(value, Point):
            mapped = []
            for element in value:
                nested = isinstance(element, _SEQUENCE_TYPES) and not isinstance(element, Point)
                if nested or isinstance(element, _UNSUPPORTED_TYPES):
                    raise UnsupportedPropertyError(
                        f"Property '{name}' holds a nested {type(element).__name__}",
                        {"property": name},
                    )
                mapped.append(self.normalize(element))
            return mapped
        return self.normalize(value)

    def get_index_for(self, kind: EntityKind) -> str:
        """Index that documents of the given entity kind are written to."""
        return self._index_policy(self.index_prefix, kind)

    def bypass_inclusion_policies(self) -> bool:
        return self._bypass_inclusion_policies
