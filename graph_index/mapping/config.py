"""
Mapper configuration.

Parses the string option map handed to a mapper into an immutable
configuration. Parsing never fails: blank or missing values fall back to
their defaults.
"""
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from graph_index.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_INDEX = "neo4j-index"
DEFAULT_KEY_PROPERTY = "uuid"
DEFAULT_FORCE_STRINGS = "false"

# Recognized option keys
INDEX_OPTION = "index"
KEY_PROPERTY_OPTION = "keyProperty"
FORCE_STRINGS_OPTION = "forceStrings"


def _option(options: Mapping[str, Optional[str]], key: str, default: str) -> str:
    value = options.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


class MapperConfig(BaseModel):
    """Effective mapper settings, read-only once built."""

    model_config = ConfigDict(frozen=True)

    index_prefix: str = DEFAULT_INDEX
    key_property: str = DEFAULT_KEY_PROPERTY
    force_strings: bool = False

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Optional[str]]] = None) -> "MapperConfig":
        """
        Build a configuration from raw options.

        Args:
            options: Mapping with optional "index", "keyProperty" and
                "forceStrings" keys. Other keys are ignored.

        Returns:
            MapperConfig with trimmed values, defaults applied to blanks
        """
        options = options or {}

        index_prefix = _option(options, INDEX_OPTION, DEFAULT_INDEX)
        logger.info(f"Elasticsearch index-prefix set to {index_prefix}")

        key_property = _option(options, KEY_PROPERTY_OPTION, DEFAULT_KEY_PROPERTY)
        logger.info(f"Elasticsearch key-property set to {key_property}")

        force_strings = _option(options, FORCE_STRINGS_OPTION, DEFAULT_FORCE_STRINGS).lower() == "true"
        logger.info(f"Elasticsearch force-strings set to {force_strings}")

        return cls(
            index_prefix=index_prefix,
            key_property=key_property,
            force_strings=force_strings,
        )
