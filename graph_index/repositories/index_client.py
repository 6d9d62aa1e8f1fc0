"""
Search index client.

Thin adapter over the Elasticsearch client exposing the three calls the
indexing code needs: index existence check, index creation and bulk writes.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from elasticsearch import ApiError, Elasticsearch
from elasticsearch.helpers import bulk

from graph_index.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateIndexResult:
    """Outcome of a create-index call that reached the backend."""

    succeeded: bool
    error_message: Optional[str] = None


class SearchIndexClient(Protocol):
    def index_exists(self, name: str) -> bool: ...

    def create_index(self, name: str) -> CreateIndexResult: ...

    def bulk(self, actions: Iterable[Dict[str, Any]]) -> Tuple[int, List[Any]]: ...


def _error_detail(error: ApiError) -> str:
    body = error.body if isinstance(error.body, dict) else {}
    reason = body.get("error", {})
    if isinstance(reason, dict) and reason:
        return f"{reason.get('type', 'error')}: {reason.get('reason', error.message)}"
    return str(error.message)


class ElasticsearchIndexClient:
    """
    SearchIndexClient backed by elasticsearch-py.

    An error response from the backend on create is reported through
    CreateIndexResult; transport failures (connection refused, timeouts)
    are raised to the caller.
    """

    def __init__(self, client: Elasticsearch, request_timeout: Optional[int] = None):
        """
        Args:
            client: Elasticsearch client instance
            request_timeout: Optional per-request timeout for bulk writes
        """
        self.client = client
        self.request_timeout = request_timeout

    def index_exists(self, name: str) -> bool:
        return bool(self.client.indices.exists(index=name))

    def create_index(self, name: str) -> CreateIndexResult:
        """Create an index with backend defaults (no settings or mappings body)."""
        try:
            self.client.indices.create(index=name)
        except ApiError as e:
            return CreateIndexResult(succeeded=False, error_message=_error_detail(e))
        return CreateIndexResult(succeeded=True)

    def bulk(self, actions: Iterable[Dict[str, Any]]) -> Tuple[int, List[Any]]:
        """
        Send bulk actions without raising on per-document failures.

        Returns:
            (success_count, failed_items)
        """
        client = self.client
        if self.request_timeout is not None:
            client = client.options(request_timeout=self.request_timeout)
        success_count, failed_items = bulk(client, actions, raise_on_error=False)
        return success_count, list(failed_items)
