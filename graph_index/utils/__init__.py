"""Utility functions and helpers."""

from graph_index.utils.exceptions import (
    BaseAppException,
    ConfigurationNotInitializedError,
    MapperConfigurationError,
    UnsupportedPropertyError,
    SearchMatchError,
    IndexingError,
)

__all__ = [
    "BaseAppException",
    "ConfigurationNotInitializedError",
    "MapperConfigurationError",
    "UnsupportedPropertyError",
    "SearchMatchError",
    "IndexingError",
]
