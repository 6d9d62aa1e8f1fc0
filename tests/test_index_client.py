"""Tests for the Elasticsearch index client adapter."""
from unittest.mock import MagicMock, patch

import pytest
from elasticsearch import BadRequestError, ConnectionError as ESConnectionError

from graph_index.repositories.index_client import CreateIndexResult, ElasticsearchIndexClient


@pytest.fixture
def es():
    return MagicMock()


def test_index_exists(es):
    es.indices.exists.return_value = True

    assert ElasticsearchIndexClient(es).index_exists("graph") is True
    es.indices.exists.assert_called_once_with(index="graph")


def test_index_missing(es):
    es.indices.exists.return_value = False

    assert ElasticsearchIndexClient(es).index_exists("graph") is False


def test_create_index_uses_backend_defaults(es):
    result = ElasticsearchIndexClient(es).create_index("graph")

    assert result == CreateIndexResult(succeeded=True)
    es.indices.create.assert_called_once_with(index="graph")


def test_create_index_reports_backend_error(es):
    es.indices.create.side_effect = BadRequestError(
        "resource_already_exists_exception",
        meta=MagicMock(status=400),
        body={
            "error": {
                "type": "resource_already_exists_exception",
                "reason": "index [graph] already exists",
            },
            "status": 400,
        },
    )

    result = ElasticsearchIndexClient(es).create_index("graph")

    assert result.succeeded is False
    assert result.error_message == "resource_already_exists_exception: index [graph] already exists"


def test_create_index_reports_error_without_body(es):
    es.indices.create.side_effect = BadRequestError("bad request", meta=MagicMock(status=400), body=None)

    result = ElasticsearchIndexClient(es).create_index("graph")

    assert result == CreateIndexResult(False, "bad request")


def test_create_index_transport_error_propagates(es):
    es.indices.create.side_effect = ESConnectionError("connection refused")

    with pytest.raises(ESConnectionError):
        ElasticsearchIndexClient(es).create_index("graph")


def test_bulk_does_not_raise_on_item_errors(es):
    actions = [{"_index": "graph", "_id": "a", "_source": {}}]
    with patch("graph_index.repositories.index_client.bulk", return_value=(1, [])) as bulk:
        assert ElasticsearchIndexClient(es).bulk(actions) == (1, [])

    bulk.assert_called_once_with(es, actions, raise_on_error=False)


def test_bulk_applies_request_timeout(es):
    timed = MagicMock()
    es.options.return_value = timed
    with patch("graph_index.repositories.index_client.bulk", return_value=(0, [{"index": {}}])) as bulk:
        success, failed = ElasticsearchIndexClient(es, request_timeout=10).bulk([])

    es.options.assert_called_once_with(request_timeout=10)
    bulk.assert_called_once_with(timed, [], raise_on_error=False)
    assert (success, failed) == (0, [{"index": {}}])
