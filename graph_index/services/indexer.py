"""
Entity indexing service.

Write path from the graph to Elasticsearch: builds bulk actions from the
mapper's documents and keys and sends them in batches.
"""
import time
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from graph_index.mapping.entity import Entity
from graph_index.mapping.mapper import DocumentMapper
from graph_index.repositories.entity_source import GraphEntitySource
from graph_index.repositories.index_client import SearchIndexClient
from graph_index.utils.exceptions import IndexingError
from graph_index.utils.logging import get_logger
from graph_index.utils.metrics import (
    bulk_documents_total,
    bulk_request_duration_seconds,
    entities_skipped_total,
)

logger = get_logger(__name__)

InclusionPolicy = Callable[[Entity], bool]


@dataclass
class IndexingReport:
    """Counts of one indexing or deletion run."""

    indexed: int = 0
    failed: int = 0
    skipped: int = 0

    def merge(self, other: "IndexingReport") -> "IndexingReport":
        return IndexingReport(
            indexed=self.indexed + other.indexed,
            failed=self.failed + other.failed,
            skipped=self.skipped + other.skipped,
        )


def _batches(items: Iterable[Any], size: int) -> Iterator[List[Any]]:
    iterator = iter(items)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


class EntityIndexer:
    """
    Sends graph entities to the search index.

    Handles:
    - Filtering entities through the inclusion policy
    - Indexing documents under the entity key
    - Deleting documents of removed entities
    - Full reindex from the graph
    """

    def __init__(
        self,
        mapper: DocumentMapper,
        client: SearchIndexClient,
        inclusion_policy: Optional[InclusionPolicy] = None,
        batch_size: int = 500,
    ):
        """
        Args:
            mapper: Configured document mapper
            client: Search index client
            inclusion_policy: Optional predicate deciding which entities are indexed
            batch_size: Number of actions per bulk request
        """
        self.mapper = mapper
        self.client = client
        self.inclusion_policy = inclusion_policy
        self.batch_size = max(1, batch_size)

    def is_included(self, entity: Entity) -> bool:
        if self.mapper.bypass_inclusion_policies() or self.inclusion_policy is None:
            return True
        return bool(self.inclusion_policy(entity))

    def build_index_action(self, entity: Entity) -> Dict[str, Any]:
        return {
            "_index": self.mapper.get_index_for(entity.kind),
            "_id": self.mapper.get_key(entity),
            "_source": self.mapper.map_to_document(entity),
        }

    def build_delete_action(self, entity: Entity) -> Dict[str, Any]:
        return {
            "_op_type": "delete",
            "_index": self.mapper.get_index_for(entity.kind),
            "_id": self.mapper.get_key(entity),
        }

    def index_entities(self, entities: Iterable[Entity]) -> IndexingReport:
        """
        Index entities in bulk.

        Per-document failures are counted and logged, not raised.

        Raises:
            IndexingError: If a bulk request fails as a whole
        """
        return self._run("index", entities, self.build_index_action)

    def delete_entities(self, entities: Iterable[Entity]) -> IndexingReport:
        """Delete the documents of the given entities."""
        return self._run("delete", entities, self.build_delete_action)

    def reindex(self, source: GraphEntitySource) -> IndexingReport:
        """Index every node, then every relationship, of the graph."""
        nodes = self.index_entities(source.iter_nodes())
        relationships = self.index_entities(source.iter_relationships())
        report = nodes.merge(relationships)
        logger.info(
            f"Reindexed graph: {report.indexed} indexed, {report.failed} failed, {report.skipped} skipped"
        )
        return report

    def _included(self, entities: Iterable[Entity], report: IndexingReport) -> Iterator[Entity]:
        for entity in entities:
            if self.is_included(entity):
                yield entity
            else:
                report.skipped += 1
                entities_skipped_total.labels(entity_kind=entity.kind.value).inc()

    def _run(
        self,
        operation: str,
        entities: Iterable[Entity],
        build_action: Callable[[Entity], Dict[str, Any]],
    ) -> IndexingReport:
        report = IndexingReport()
        for batch in _batches(self._included(entities, report), self.batch_size):
            actions = [build_action(entity) for entity in batch]
            start = time.time()
            try:
                success_count, failed_items = self.client.bulk(actions)
            except Exception as e:
                logger.error(f"Bulk {operation} of {len(actions)} documents failed: {str(e)}", exc_info=True)
                raise IndexingError(
                    f"Failed to {operation} documents: {str(e)}",
                    {"operation": operation, "batch_size": len(actions), "error": str(e)},
                ) from e
            finally:
                bulk_request_duration_seconds.labels(operation=operation).observe(time.time() - start)

            report.indexed += success_count
            report.failed += len(failed_items)
            bulk_documents_total.labels(operation=operation, status="success").inc(success_count)
            if failed_items:
                bulk_documents_total.labels(operation=operation, status="failed").inc(len(failed_items))
                logger.warning(
                    f"Failed to {operation} {len(failed_items)} out of {len(actions)} documents. "
                    f"Succeeded: {success_count}"
                )
                for item in failed_items[:5]:
                    logger.debug(f"Failed item: {item}")

        logger.info(f"Bulk {operation} finished: {report.indexed} succeeded, {report.failed} failed")
        return report
