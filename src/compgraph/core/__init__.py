"""Core catalog types: models, errors, sources and the per-query snapshot."""

from compgraph.core.catalog import CatalogSnapshot, CatalogSource, InMemoryCatalog
from compgraph.core.errors import CatalogError, InvalidArgument, NotFound, UpstreamReadFailure
from compgraph.core.models import (
    Complexity,
    Entity,
    FreeText,
    Provenance,
    RelationshipEdge,
    RelationType,
    TagAssignment,
    TagType,
)

__all__ = [
    "CatalogError",
    "CatalogSnapshot",
    "CatalogSource",
    "Complexity",
    "Entity",
    "FreeText",
    "InMemoryCatalog",
    "InvalidArgument",
    "NotFound",
    "Provenance",
    "RelationType",
    "RelationshipEdge",
    "TagAssignment",
    "TagType",
    "UpstreamReadFailure",
]
