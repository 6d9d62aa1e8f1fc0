"""
Neo4j database connection and management.

This module provides the driver used to read nodes and relationships
that get mapped into the search index.
"""
from neo4j import GraphDatabase, Driver
from typing import Optional

from graph_index.core.config import settings
from graph_index.core.database import DatabaseError
from graph_index.utils.logging import get_logger

logger = get_logger(__name__)

# Global Neo4j driver instance
_neo4j_driver: Optional[Driver] = None


def get_neo4j_driver() -> Driver:
    """
    Get or create Neo4j driver instance.

    Returns:
        Neo4j driver instance

    Raises:
        DatabaseError: If driver creation or connectivity verification fails
    """
    global _neo4j_driver

    if _neo4j_driver is not None:
        return _neo4j_driver

    try:
        driver = GraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_user, settings.neo4j_password),
            max_connection_pool_size=settings.neo4j_max_connection_pool_size,
            connection_timeout=settings.neo4j_timeout,
        )
        driver.verify_connectivity()

        _neo4j_driver = driver
        logger.info(f"Initialized Neo4j driver for: {settings.neo4j_uri}")
        return _neo4j_driver
    except Exception as e:
        logger.error(f"Failed to create Neo4j driver: {str(e)}")
        raise DatabaseError(
            f"Failed to create Neo4j driver: {str(e)}",
            {"neo4j_uri": settings.neo4j_uri},
        ) from e


def close_neo4j_driver() -> None:
    """Close the Neo4j driver connection."""
    global _neo4j_driver
    if _neo4j_driver is not None:
        _neo4j_driver.close()
        _neo4j_driver = None
        logger.info("Closed Neo4j driver connection")
