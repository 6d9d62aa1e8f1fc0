"""Search hit correlation."""

from graph_index.search.match import SearchMatch

__all__ = ["SearchMatch"]
