"""
Prometheus metrics for graph indexing.

Metrics are organized by category:
- Mapping metrics (documents built from graph entities)
- Provisioning metrics (index existence checks and creations)
- Indexing metrics (bulk writes to Elasticsearch)
"""
from prometheus_client import Counter, Histogram
from prometheus_client import REGISTRY

# ============================================================================
# Mapping Metrics
# ============================================================================

documents_mapped_total = Counter(
    'graph_index_documents_mapped_total',
    'Total number of graph entities mapped to search documents',
    ['entity_kind']
)

# ============================================================================
# Provisioning Metrics
# ============================================================================

# outcome: exists, created, create_failed
index_provisioning_total = Counter(
    'graph_index_index_provisioning_total',
    'Total number of per-index provisioning runs by outcome',
    ['outcome']
)

index_provisioning_duration_seconds = Histogram(
    'graph_index_index_provisioning_duration_seconds',
    'Duration of a single index check-then-create sequence in seconds',
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# ============================================================================
# Indexing Metrics
# ============================================================================

# operation: index, delete
bulk_documents_total = Counter(
    'graph_index_bulk_documents_total',
    'Total number of documents sent to Elasticsearch in bulk requests',
    ['operation', 'status']
)

bulk_request_duration_seconds = Histogram(
    'graph_index_bulk_request_duration_seconds',
    'Elasticsearch bulk request duration in seconds',
    ['operation'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

entities_skipped_total = Counter(
    'graph_index_entities_skipped_total',
    'Total number of entities rejected by the inclusion policy',
    ['entity_kind']
)


def get_all_metrics():
    """Get all registered metrics."""
    return REGISTRY
