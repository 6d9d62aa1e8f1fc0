"""
Search backend connection.

This module initializes the shared Elasticsearch client used for index
provisioning and bulk document writes.
"""

from typing import Optional
from urllib.parse import urlparse

from elasticsearch import Elasticsearch

from graph_index.core.config import settings
from graph_index.core.serializer import neo4j_serializers
from graph_index.utils.exceptions import BaseAppException
from graph_index.utils.logging import get_logger

logger = get_logger(__name__)


class DatabaseError(BaseAppException):
    """Raised when a backend connection cannot be established."""
    pass


# Global Elasticsearch client instance
_elasticsearch_client: Optional[Elasticsearch] = None


def get_elasticsearch_client() -> Elasticsearch:
    """
    Get or create Elasticsearch client instance.

    Returns:
        Elasticsearch client instance

    Raises:
        DatabaseError: If Elasticsearch client creation fails
    """
    global _elasticsearch_client

    if _elasticsearch_client is not None:
        return _elasticsearch_client

    try:
        parsed = urlparse(settings.elasticsearch_url)
        host = parsed.hostname or "localhost"
        port = parsed.port or 9200
        scheme = parsed.scheme or "http"

        client = Elasticsearch(
            hosts=[{"host": host, "port": port, "scheme": scheme}],
            request_timeout=settings.elasticsearch_timeout,
            max_retries=settings.elasticsearch_max_retries,
            retry_on_timeout=True,
            serializers=neo4j_serializers(),
        )

        if not client.ping():
            raise DatabaseError(
                "Failed to connect to Elasticsearch: ping() returned False",
                {"url": settings.elasticsearch_url},
            )

        _elasticsearch_client = client
        logger.info(f"Initialized Elasticsearch client: {settings.elasticsearch_url}")
        return _elasticsearch_client
    except DatabaseError:
        raise
    except Exception as e:
        logger.error(f"Failed to create Elasticsearch client: {str(e)}")
        raise DatabaseError(
            f"Failed to create Elasticsearch client: {str(e)}",
            {
                "url": settings.elasticsearch_url,
                "error": str(e),
            },
        ) from e


def reset_elasticsearch_client() -> None:
    """Reset the global Elasticsearch client (useful for testing)."""
    global _elasticsearch_client
    _elasticsearch_client = None
