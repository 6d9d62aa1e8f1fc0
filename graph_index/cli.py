"""
Command line entry point.

    graph-index ensure-indexes [--variant advanced] [--workers 2]
    graph-index reindex [--variant advanced] [--batch-size 1000]

Connection settings come from config.yaml and the environment.
"""
import argparse
import sys
from typing import List, Optional

from prometheus_client import generate_latest

from graph_index.core.config import settings
from graph_index.core.database import get_elasticsearch_client
from graph_index.core.neo4j_database import close_neo4j_driver
from graph_index.mapping.mapper import DocumentMapper
from graph_index.mapping.synchronizer import IndexState, IndexSynchronizer
from graph_index.mapping.variants import MAPPER_VARIANTS, create_mapper
from graph_index.repositories.entity_source import GraphEntitySource
from graph_index.repositories.index_client import ElasticsearchIndexClient
from graph_index.services.indexer import EntityIndexer
from graph_index.utils.logging import (
    configure_logging,
    generate_correlation_id,
    get_logger,
    set_correlation_id,
)
from graph_index.utils.metrics import get_all_metrics

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graph-index",
        description="Map Neo4j nodes and relationships into Elasticsearch",
    )
    parser.add_argument(
        "--variant",
        choices=sorted(MAPPER_VARIANTS),
        default=None,
        help=f"Mapping variant (default: {settings.mapping_variant})",
    )
    parser.add_argument(
        "--print-metrics",
        action="store_true",
        help="Print Prometheus metrics after the run",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ensure = subparsers.add_parser("ensure-indexes", help="Create missing indexes")
    ensure.add_argument(
        "--workers",
        type=int,
        default=settings.provisioning_workers,
        help="Indexes provisioned concurrently (default: %(default)s)",
    )

    reindex = subparsers.add_parser("reindex", help="Index every node and relationship")
    reindex.add_argument(
        "--batch-size",
        type=int,
        default=settings.bulk_batch_size,
        help="Documents per bulk request (default: %(default)s)",
    )
    return parser


def _search_client() -> ElasticsearchIndexClient:
    return ElasticsearchIndexClient(
        get_elasticsearch_client(),
        request_timeout=settings.elasticsearch_timeout,
    )


def ensure_indexes(mapper: DocumentMapper, client: ElasticsearchIndexClient, workers: int) -> bool:
    states = IndexSynchronizer(mapper, max_workers=workers).ensure_indexes_exist(client)
    for name, state in states.items():
        print(f"{name}: {state.value}")
    return all(state != IndexState.CREATE_FAILED for state in states.values())


def run(args: argparse.Namespace) -> bool:
    mapper = create_mapper(args.variant or settings.mapping_variant, settings.mapping_options)
    client = _search_client()

    if args.command == "ensure-indexes":
        return ensure_indexes(mapper, client, args.workers)

    if not ensure_indexes(mapper, client, settings.provisioning_workers):
        logger.warning("Some indexes could not be created, documents for them will be rejected")
    try:
        report = EntityIndexer(mapper, client, batch_size=args.batch_size).reindex(GraphEntitySource())
    finally:
        close_neo4j_driver()
    print(f"indexed: {report.indexed}, failed: {report.failed}, skipped: {report.skipped}")
    return report.failed == 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(log_level=settings.log_level, json_output=settings.log_json)
    set_correlation_id(generate_correlation_id())

    try:
        success = run(args)
    except Exception as e:
        logger.error(f"graph-index {args.command} failed: {str(e)}", exc_info=True)
        success = False

    if args.print_metrics:
        print(generate_latest(get_all_metrics()).decode("utf-8"))

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
