"""
Custom exceptions.

Application-specific exception classes.
"""


class BaseAppException(Exception):
    """Base exception for all application-specific exceptions."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationNotInitializedError(BaseAppException):
    """Raised when a mapper is used before configure() was called."""
    pass


class MapperConfigurationError(BaseAppException):
    """Raised when a mapper cannot be built or is configured twice."""
    pass


class UnsupportedPropertyError(BaseAppException):
    """Raised when a property value has a shape that cannot be indexed."""
    pass


class SearchMatchError(BaseAppException):
    """Raised when a search match is resolved more than once."""
    pass


class IndexingError(BaseAppException):
    """Raised when writing documents to the search index fails."""
    pass
