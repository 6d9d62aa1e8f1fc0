"""
Index synchronizer.

Makes sure every index a mapper writes to exists before documents are sent.
Per index the sequence is: check existence, create when absent, report a
create the backend refused. Repeated runs are no-ops once indexes exist.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Dict, List

from graph_index.mapping.entity import EntityKind
from graph_index.mapping.mapper import DocumentMapper
from graph_index.repositories.index_client import SearchIndexClient
from graph_index.utils.logging import get_logger
from graph_index.utils.metrics import (
    index_provisioning_total,
    index_provisioning_duration_seconds,
)

logger = get_logger(__name__)


class IndexState(str, Enum):
    UNKNOWN = "unknown"
    CHECKED_EXISTS = "checked_exists"
    CHECKED_ABSENT = "checked_absent"
    CREATED = "created"
    CREATE_FAILED = "create_failed"


class IndexSynchronizer:
    """
    Provisions the indexes of a configured mapper.

    A create refused by the backend is logged and reported as CREATE_FAILED,
    never raised: a concurrent creator losing the race ends up there too.
    Transport errors during the check or the create propagate.
    """

    def __init__(self, mapper: DocumentMapper, max_workers: int = 1):
        """
        Args:
            mapper: Configured mapper whose index names are provisioned
            max_workers: Number of indexes provisioned concurrently
        """
        self.mapper = mapper
        self.max_workers = max(1, max_workers)

    def index_names(self) -> List[str]:
        """Distinct index names over all entity kinds, in kind order."""
        names = [self.mapper.get_index_for(kind) for kind in EntityKind]
        return list(dict.fromkeys(names))

    def ensure_indexes_exist(self, client: SearchIndexClient) -> Dict[str, IndexState]:
        """
        Ensure every index of the mapper exists.

        Args:
            client: Search index client

        Returns:
            Index name -> terminal provisioning state

        Raises:
            Exception: Whatever the client raised for the first index that failed
        """
        names = self.index_names()
        logger.info(f"Ensuring {len(names)} Elasticsearch index(es) exist: {', '.join(names)}")

        if self.max_workers == 1 or len(names) == 1:
            return {name: self.ensure_index(client, name) for name in names}

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(names))) as executor:
            futures = {name: executor.submit(self.ensure_index, client, name) for name in names}
        # Executor has drained; result() re-raises the first failure in name order
        return {name: future.result() for name, future in futures.items()}

    def ensure_index(self, client: SearchIndexClient, name: str) -> IndexState:
        """
        Check-then-create a single index.

        Args:
            client: Search index client
            name: Index name

        Returns:
            CHECKED_EXISTS, CREATED or CREATE_FAILED
        """
        start = time.time()
        try:
            if client.index_exists(name):
                logger.info(f"Index {name} already exists in Elasticsearch.")
                index_provisioning_total.labels(outcome="exists").inc()
                return IndexState.CHECKED_EXISTS

            logger.info(f"Index {name} does not exist in Elasticsearch, creating...")
            result = client.create_index(name)

            if result.succeeded:
                logger.info(f"Created Elasticsearch index {name}.")
                index_provisioning_total.labels(outcome="created").inc()
                return IndexState.CREATED

            logger.error(
                f"Failed to create Elasticsearch index {name}. Details: {result.error_message}"
            )
            index_provisioning_total.labels(outcome="create_failed").inc()
            return IndexState.CREATE_FAILED
        finally:
            index_provisioning_duration_seconds.observe(time.time() - start)
