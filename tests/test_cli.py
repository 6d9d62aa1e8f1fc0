"""Tests for the graph-index command line."""
from unittest.mock import MagicMock, patch

import pytest

from conftest import FakeIndexClient, make_node
from graph_index import cli
from graph_index.core.config import settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    monkeypatch.setattr(settings, "mapping_variant", "default")
    monkeypatch.setattr(settings, "mapping_options", {"index": "graph"})
    monkeypatch.setattr(settings, "provisioning_workers", 1)
    monkeypatch.setattr(cli, "configure_logging", MagicMock())


def run_cli(client, *argv):
    with patch.object(cli, "_search_client", return_value=client):
        return cli.main(list(argv))


def test_ensure_indexes_creates_missing(capsys):
    client = FakeIndexClient()

    assert run_cli(client, "ensure-indexes") == 0
    assert client.create_calls == ["graph"]
    assert "graph: created" in capsys.readouterr().out


def test_ensure_indexes_with_advanced_variant():
    client = FakeIndexClient(existing=["graph-node"])

    assert run_cli(client, "--variant", "advanced", "ensure-indexes", "--workers", "2") == 0
    assert client.create_calls == ["graph-relationship"]


def test_ensure_indexes_fails_when_create_refused():
    assert run_cli(FakeIndexClient(refuse=["graph"]), "ensure-indexes") == 1


def test_ensure_indexes_fails_on_transport_error():
    assert run_cli(FakeIndexClient(broken=["graph"]), "ensure-indexes") == 1


def test_reindex(capsys):
    client = FakeIndexClient(existing=["graph"])
    source = MagicMock()
    source.iter_nodes.return_value = iter([make_node({"uuid": "a"})])
    source.iter_relationships.return_value = iter([])

    with patch.object(cli, "GraphEntitySource", return_value=source), \
            patch.object(cli, "close_neo4j_driver") as close_driver:
        assert run_cli(client, "reindex", "--batch-size", "10") == 0

    close_driver.assert_called_once()
    assert client.bulk_calls[0][0]["_id"] == "a"
    assert "indexed: 1, failed: 0, skipped: 0" in capsys.readouterr().out


def test_print_metrics(capsys):
    assert run_cli(FakeIndexClient(existing=["graph"]), "--print-metrics", "ensure-indexes") == 0
    assert "graph_index_index_provisioning_total" in capsys.readouterr().out


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])
