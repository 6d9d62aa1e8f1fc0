"""
JSON serialization of Neo4j property values.

Documents keep temporal and spatial values as the driver returns them;
the Elasticsearch client turns them into JSON here:
- Date, Time, DateTime -> ISO 8601 string
- Duration -> ISO 8601 duration string
- Point -> [x, y] or [x, y, z] (lon/lat order for WGS-84 points)
"""
from typing import Any

from elasticsearch.serializer import JsonSerializer, NdjsonSerializer
from neo4j.spatial import Point
from neo4j.time import Date, DateTime, Duration, Time

_TEMPORAL_TYPES = (Date, Time, DateTime, Duration)


class Neo4jValueMixin:
    def default(self, data: Any) -> Any:
        if isinstance(data, _TEMPORAL_TYPES):
            return data.iso_format()
        if isinstance(data, Point):
            return list(data)
        return super().default(data)


class Neo4jJsonSerializer(Neo4jValueMixin, JsonSerializer):
    pass


class Neo4jNdjsonSerializer(Neo4jValueMixin, NdjsonSerializer):
    pass


def neo4j_serializers() -> dict:
    """Serializers keyed by mimetype, for Elasticsearch(serializers=...)."""
    return {
        Neo4jJsonSerializer.mimetype: Neo4jJsonSerializer(),
        Neo4jNdjsonSerializer.mimetype: Neo4jNdjsonSerializer(),
    }
