"""Shared fixtures for graph-index tests."""
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

from graph_index.mapping.entity import Entity
from graph_index.mapping.mapper import DocumentMapper
from graph_index.mapping.variants import single_index
from graph_index.repositories.index_client import CreateIndexResult


class FakeIndexClient:
    """In-memory stand-in for the Elasticsearch index client."""

    def __init__(
        self,
        existing: Iterable[str] = (),
        refuse: Iterable[str] = (),
        broken: Iterable[str] = (),
    ):
        self.existing = set(existing)
        self.refuse = set(refuse)
        self.broken = set(broken)
        self.exists_calls: List[str] = []
        self.create_calls: List[str] = []
        self.bulk_calls: List[List[Dict[str, Any]]] = []
        self.bulk_failures: List[Any] = []
        self._lock = threading.Lock()

    def index_exists(self, name: str) -> bool:
        with self._lock:
            self.exists_calls.append(name)
        if name in self.broken:
            raise ConnectionError(f"connection refused while checking {name}")
        return name in self.existing

    def create_index(self, name: str) -> CreateIndexResult:
        with self._lock:
            self.create_calls.append(name)
            if name in self.refuse:
                return CreateIndexResult(False, "resource_already_exists_exception: index exists")
            self.existing.add(name)
        return CreateIndexResult(True)

    def bulk(self, actions: Iterable[Dict[str, Any]]) -> Tuple[int, List[Any]]:
        actions = list(actions)
        self.bulk_calls.append(actions)
        failed = self.bulk_failures[: len(actions)]
        return len(actions) - len(failed), list(failed)


@pytest.fixture
def fake_client():
    return FakeIndexClient()


@pytest.fixture
def mapper():
    mapper = DocumentMapper(single_index)
    mapper.configure({})
    return mapper


def make_node(properties: Dict[str, Any], labels=("Person",), element_id: Optional[str] = None) -> Entity:
    return Entity.node(properties, labels=labels, element_id=element_id)


def make_relationship(properties: Dict[str, Any], type: str = "KNOWS") -> Entity:
    return Entity.relationship(properties, type=type)


@pytest.fixture(autouse=True)
def _isolate_correlation_id():
    """Keep the correlation ID set by cli.main() from leaking between tests."""
    from graph_index.utils.logging import correlation_id_var

    token = correlation_id_var.set("")
    yield
    correlation_id_var.reset(token)
