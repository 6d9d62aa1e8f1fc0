"""Tests for EntityIndexer."""
from unittest.mock import MagicMock

import pytest

from conftest import FakeIndexClient, make_node, make_relationship
from graph_index.mapping.mapper import DocumentMapper
from graph_index.mapping.variants import advanced_mapper, single_index
from graph_index.services.indexer import EntityIndexer, IndexingReport
from graph_index.utils.exceptions import IndexingError


def test_build_index_action(mapper):
    indexer = EntityIndexer(mapper, FakeIndexClient())

    action = indexer.build_index_action(make_node({"uuid": "abc", "name": "Alice"}))

    assert action == {"_index": "neo4j-index", "_id": "abc", "_source": {"name": "Alice"}}


def test_build_delete_action_uses_kind_index():
    mapper = advanced_mapper()
    mapper.configure({"index": "graph"})
    indexer = EntityIndexer(mapper, FakeIndexClient())

    action = indexer.build_delete_action(make_relationship({"uuid": "r1"}))

    assert action == {"_op_type": "delete", "_index": "graph-relationship", "_id": "r1"}


def test_index_entities_in_batches(mapper, fake_client):
    indexer = EntityIndexer(mapper, fake_client, batch_size=2)
    nodes = [make_node({"uuid": str(i)}) for i in range(5)]

    report = indexer.index_entities(nodes)

    assert report == IndexingReport(indexed=5, failed=0, skipped=0)
    assert [len(batch) for batch in fake_client.bulk_calls] == [2, 2, 1]


def test_item_failures_are_counted(mapper, fake_client):
    fake_client.bulk_failures = [{"index": {"_id": "1", "error": "mapper_parsing_exception"}}]
    indexer = EntityIndexer(mapper, fake_client)

    report = indexer.index_entities([make_node({"uuid": "1"}), make_node({"uuid": "2"})])

    assert report.indexed == 1
    assert report.failed == 1


def test_inclusion_policy_filters_entities(mapper, fake_client):
    indexer = EntityIndexer(mapper, fake_client, inclusion_policy=lambda entity: "Person" in entity.labels)

    report = indexer.index_entities([
        make_node({"uuid": "1"}, labels=("Person",)),
        make_node({"uuid": "2"}, labels=("Company",)),
    ])

    assert report == IndexingReport(indexed=1, failed=0, skipped=1)
    assert [action["_id"] for action in fake_client.bulk_calls[0]] == ["1"]


def test_mapper_can_bypass_inclusion_policy(fake_client):
    mapper = DocumentMapper(single_index, bypass_inclusion_policies=True)
    mapper.configure({})
    indexer = EntityIndexer(mapper, fake_client, inclusion_policy=lambda entity: False)

    report = indexer.index_entities([make_node({"uuid": "1"})])

    assert report.indexed == 1
    assert report.skipped == 0


def test_no_bulk_request_when_nothing_included(mapper, fake_client):
    indexer = EntityIndexer(mapper, fake_client, inclusion_policy=lambda entity: False)

    report = indexer.delete_entities([make_node({"uuid": "1"})])

    assert report.skipped == 1
    assert fake_client.bulk_calls == []


def test_bulk_failure_is_wrapped(mapper):
    client = MagicMock()
    client.bulk.side_effect = ConnectionError("refused")
    indexer = EntityIndexer(mapper, client)

    with pytest.raises(IndexingError) as exc_info:
        indexer.index_entities([make_node({"uuid": "1"})])

    assert exc_info.value.details["operation"] == "index"
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_reindex_streams_nodes_then_relationships(mapper, fake_client):
    source = MagicMock()
    source.iter_nodes.return_value = iter([make_node({"uuid": "n1"}), make_node({"uuid": "n2"})])
    source.iter_relationships.return_value = iter([make_relationship({"uuid": "r1"})])

    report = EntityIndexer(mapper, fake_client).reindex(source)

    assert report == IndexingReport(indexed=3, failed=0, skipped=0)
    ids = [action["_id"] for batch in fake_client.bulk_calls for action in batch]
    assert ids == ["n1", "n2", "r1"]
