"""Relationship mining over guidance text and code samples."""

from compgraph.relationships.extractor import (
    BASE_WEIGHT,
    CODE_USAGE_WEIGHT,
    RelationshipExtractor,
    classify_relation,
    edge_weight,
    usage_marker,
)
from compgraph.relationships.related import RelatedEntry, RelatedResult, find_related

__all__ = [
    "BASE_WEIGHT",
    "CODE_USAGE_WEIGHT",
    "RelatedEntry",
    "RelatedResult",
    "RelationshipExtractor",
    "classify_relation",
    "edge_weight",
    "find_related",
    "usage_marker",
]
