"""compgraph: relationship and relevance queries over a UI component catalog.

Resolve typo-prone component names, mine implicit relationships from
guidance text and code samples, assemble and export graphs, walk
dependencies, and score similarity and conflicts.

Usage:
    from compgraph import CatalogSnapshot, GraphAssembler, open_catalog

    snapshot = CatalogSnapshot.from_source(open_catalog("catalog.yaml"))
    graph = GraphAssembler(snapshot).build(["accordion"], output_format="mermaid")
"""

from compgraph.analysis import available_tags, check_conflicts, find_by_tag, find_similar
from compgraph.core import (
    CatalogError,
    CatalogSnapshot,
    CatalogSource,
    Complexity,
    Entity,
    FreeText,
    InMemoryCatalog,
    InvalidArgument,
    NotFound,
    Provenance,
    RelationshipEdge,
    RelationType,
    TagAssignment,
    TagType,
    UpstreamReadFailure,
)
from compgraph.graph import DependencyTraverser, GraphAssembler
from compgraph.relationships import RelationshipExtractor, find_related
from compgraph.resolve import EntityResolver, fuzzy_score, levenshtein
from compgraph.settings import CatalogSettings, get_settings, reset_settings
from compgraph.sources import SqliteCatalog, load_yaml_catalog, open_catalog

__version__ = "0.1.0"

__all__ = [
    "CatalogError",
    "CatalogSettings",
    "CatalogSnapshot",
    "CatalogSource",
    "Complexity",
    "DependencyTraverser",
    "Entity",
    "EntityResolver",
    "FreeText",
    "GraphAssembler",
    "InMemoryCatalog",
    "InvalidArgument",
    "NotFound",
    "Provenance",
    "RelationType",
    "RelationshipEdge",
    "RelationshipExtractor",
    "SqliteCatalog",
    "TagAssignment",
    "TagType",
    "UpstreamReadFailure",
    "available_tags",
    "check_conflicts",
    "find_by_tag",
    "find_related",
    "find_similar",
    "fuzzy_score",
    "get_settings",
    "levenshtein",
    "load_yaml_catalog",
    "open_catalog",
    "reset_settings",
]
