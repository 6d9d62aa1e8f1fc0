"""
Search match.

Correlates a raw search hit with the graph entity it was built from.
The hit only carries the document ID (the key property value) and a
score; the entity is attached later by whoever looks the ID up in the graph.
"""
from numbers import Real
from typing import Any, Dict, Generic, Optional, TypeVar

from graph_index.utils.exceptions import SearchMatchError

T = TypeVar("T")


def _score(raw: Any) -> Optional[float]:
    if isinstance(raw, bool) or not isinstance(raw, Real):
        return None
    return float(raw)


class SearchMatch(Generic[T]):
    """A search hit awaiting (or holding) its resolved graph entity."""

    def __init__(self, uuid: str, score: Any = None):
        self._uuid = uuid
        self._score = _score(score)
        self._item: Optional[T] = None

    @classmethod
    def from_hit(cls, hit: Dict[str, Any]) -> "SearchMatch[T]":
        """Build a match from an Elasticsearch hit ({"_id": ..., "_score": ...})."""
        return cls(str(hit["_id"]), hit.get("_score"))

    @property
    def uuid(self) -> str:
        return self._uuid

    @property
    def score(self) -> Optional[float]:
        return self._score

    @property
    def item(self) -> Optional[T]:
        return self._item

    @item.setter
    def item(self, value: T) -> None:
        if value is None:
            raise SearchMatchError(
                f"Search match {self._uuid} cannot be resolved to None",
                {"uuid": self._uuid},
            )
        if self._item is not None:
            raise SearchMatchError(
                f"Search match {self._uuid} is already resolved",
                {"uuid": self._uuid},
            )
        self._item = value

    @property
    def resolved(self) -> bool:
        return self._item is not None

    def __repr__(self) -> str:
        return f"SearchMatch(uuid={self._uuid!r}, score={self._score!r}, resolved={self.resolved})"
