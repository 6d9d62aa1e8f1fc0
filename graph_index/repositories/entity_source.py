"""
Graph entity source for Neo4j.

Read-only access to the nodes and relationships that are mapped into the
search index, and resolution of search matches back to graph entities.
"""
from typing import Dict, Iterable, Iterator, List, Optional

from neo4j import Driver

from graph_index.core.config import settings
from graph_index.core.neo4j_database import get_neo4j_driver
from graph_index.mapping.entity import Entity, EntityKind
from graph_index.mapping.mapper import stringify
from graph_index.search.match import SearchMatch
from graph_index.utils.logging import get_logger

logger = get_logger(__name__)

ALL_NODES_QUERY = "MATCH (n) RETURN n AS item"
ALL_RELATIONSHIPS_QUERY = "MATCH ()-[r]->() RETURN r AS item"
NODES_BY_KEY_QUERY = (
    "MATCH (n) WHERE toString(n[$key_property]) IN $keys RETURN n AS item"
)
RELATIONSHIPS_BY_KEY_QUERY = (
    "MATCH ()-[r]->() WHERE toString(r[$key_property]) IN $keys RETURN r AS item"
)


class GraphEntitySource:
    """
    Reads graph entities from Neo4j.

    Never writes to the graph.
    """

    def __init__(self, driver: Optional[Driver] = None, database: Optional[str] = None):
        """
        Args:
            driver: Optional Neo4j driver instance (shared driver if not provided)
            database: Database name (default: from config)
        """
        self.driver = driver
        self.database = database or settings.neo4j_database

    def _get_driver(self) -> Driver:
        if self.driver is not None:
            return self.driver
        return get_neo4j_driver()

    def _stream(self, query: str, params: Optional[dict] = None) -> Iterator[Entity]:
        session = self._get_driver().session(database=self.database)
        try:
            for record in session.run(query, params or {}):
                yield Entity.from_neo4j(record["item"])
        finally:
            session.close()

    def iter_nodes(self) -> Iterator[Entity]:
        return self._stream(ALL_NODES_QUERY)

    def iter_relationships(self) -> Iterator[Entity]:
        return self._stream(ALL_RELATIONSHIPS_QUERY)

    def find_by_keys(
        self,
        kind: EntityKind,
        key_property: str,
        keys: Iterable[str],
    ) -> Dict[str, Entity]:
        """
        Look up entities by key property value.

        Args:
            kind: Node or relationship
            key_property: Property holding the key (usually "uuid")
            keys: Key values as found in document IDs

        Returns:
            Key value (as string) -> entity, for the keys that exist
        """
        keys = list(dict.fromkeys(keys))
        if not keys:
            return {}

        query = NODES_BY_KEY_QUERY if kind == EntityKind.NODE else RELATIONSHIPS_BY_KEY_QUERY
        found = {}
        for entity in self._stream(query, {"key_property": key_property, "keys": keys}):
            found[stringify(entity.get_properties().get(key_property))] = entity

        logger.debug(f"Resolved {len(found)} of {len(keys)} {kind.value} keys")
        return found

    def resolve_matches(
        self,
        matches: List[SearchMatch[Entity]],
        kind: EntityKind,
        key_property: str,
    ) -> List[SearchMatch[Entity]]:
        """
        Attach graph entities to search matches.

        Matches whose key no longer exists in the graph are dropped.

        Returns:
            The resolved matches, in the order they were given
        """
        found = self.find_by_keys(kind, key_property, [match.uuid for match in matches])
        resolved = []
        for match in matches:
            entity = found.get(match.uuid)
            if entity is None:
                logger.debug(f"No {kind.value} found for search match {match.uuid}")
                continue
            if not match.resolved:
                match.item = entity
            resolved.append(match)
        return resolved
