"""Neo4j to Elasticsearch document mapping and index provisioning."""

__version__ = "0.1.0"
