"""
Application configuration.

This module loads and validates settings from config.yaml and environment variables.
"""
import yaml
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Dict, Optional


# Project root (parent of the graph_index package)
PROJECT_DIR = Path(__file__).parent.parent.parent
CONFIG_FILE = PROJECT_DIR / "config.yaml"
ENV_FILE = PROJECT_DIR / ".env"


def load_config_yaml(path: Optional[Path] = None) -> dict:
    """Load configuration from config.yaml file."""
    config_file = path or CONFIG_FILE
    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    return {}


def _as_option_map(raw: Optional[dict]) -> Dict[str, str]:
    # Mapper options are a plain string map; YAML may hand us bools or ints
    options = {}
    for key, value in (raw or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        options[str(key)] = str(value)
    return options


class Settings(BaseSettings):
    """Application settings loaded from config.yaml and environment variables."""

    def __init__(self, config_path: Optional[Path] = None, **kwargs):
        config_data = load_config_yaml(config_path)

        # Elasticsearch Settings
        es_config = config_data.get('elasticsearch', {})
        kwargs.setdefault('elasticsearch_url', es_config.get('url', "http://localhost:9200"))
        kwargs.setdefault('elasticsearch_timeout', es_config.get('timeout', 30))
        kwargs.setdefault('elasticsearch_max_retries', es_config.get('max_retries', 3))

        # Neo4j Settings
        neo4j_config = config_data.get('neo4j', {})
        kwargs.setdefault('neo4j_uri', neo4j_config.get('uri', "bolt://localhost:7687"))
        kwargs.setdefault('neo4j_user', neo4j_config.get('user', "neo4j"))
        kwargs.setdefault('neo4j_database', neo4j_config.get('database', "neo4j"))
        kwargs.setdefault('neo4j_timeout', neo4j_config.get('timeout', 30))
        kwargs.setdefault('neo4j_max_connection_pool_size', neo4j_config.get('max_connection_pool_size', 50))

        # Mapping Settings
        mapping_config = config_data.get('mapping', {})
        kwargs.setdefault('mapping_variant', mapping_config.get('variant', "default"))
        kwargs.setdefault('mapping_options', _as_option_map(mapping_config.get('options')))
        kwargs.setdefault('provisioning_workers', mapping_config.get('provisioning_workers', 1))
        kwargs.setdefault('bulk_batch_size', mapping_config.get('bulk_batch_size', 500))

        # Logging Settings
        logging_config = config_data.get('logging', {})
        kwargs.setdefault('log_level', logging_config.get('level', "INFO"))
        kwargs.setdefault('log_json', logging_config.get('json', True))

        super().__init__(**kwargs)

    # Elasticsearch Settings
    elasticsearch_url: str
    elasticsearch_timeout: int
    elasticsearch_max_retries: int

    # Neo4j Settings - password from env
    neo4j_uri: str
    neo4j_user: str
    neo4j_password: str = "neo4j-password"
    neo4j_database: str
    neo4j_timeout: int
    neo4j_max_connection_pool_size: int

    # Mapping Settings
    mapping_variant: str
    mapping_options: Dict[str, str]
    provisioning_workers: int
    bulk_batch_size: int

    # Logging Settings
    log_level: str
    log_json: bool

    model_config = {
        "env_file": str(ENV_FILE),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()
