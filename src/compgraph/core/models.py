"""Core data models for the component catalog.

These models define the contract between components:
- Storage sources produce Entities, TagAssignments and FreeText rows
- CatalogSnapshot freezes them for the lifetime of one query
- Extractors, assemblers and analyzers derive RelationshipEdges from them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from compgraph.core.errors import InvalidArgument

# =============================================================================
# Catalog rows (Contract: storage → core)
# =============================================================================
# The core only ever reads these. They are created by the ingestion side
# and never mutated here.


class Complexity(StrEnum):
    """How demanding a component is to implement."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class TagType(StrEnum):
    """Category of a tag assignment."""

    CATEGORY = "category"
    FEATURE = "feature"
    ACCESSIBILITY = "accessibility"
    INTERACTION = "interaction"


class Provenance(StrEnum):
    """Where a free-text item came from."""

    GUIDANCE = "guidance"
    SAMPLE = "sample"


@dataclass(frozen=True)
class Entity:
    """A documented component."""

    id: int
    canonical_name: str
    display_title: str
    complexity: Complexity = Complexity.MODERATE
    requires_script: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.canonical_name,
            "title": self.display_title,
            "complexity": self.complexity.value,
            "requires_script": self.requires_script,
        }


@dataclass(frozen=True)
class TagAssignment:
    """Links an entity to a tag. (entity_id, tag) is unique."""

    entity_id: int
    tag: str
    tag_type: TagType = TagType.FEATURE


@dataclass(frozen=True)
class FreeText:
    """A guidance note or code sample attached to an entity."""

    entity_id: int
    provenance: Provenance
    content: str


# =============================================================================
# Derived relationships (never persisted)
# =============================================================================


class RelationType(StrEnum):
    """Relationship types between components.

    Every edge carries a weight next to its type, so a misclassified
    heuristic edge shows up as a low-confidence edge rather than a fact.
    """

    # Dependency relationships (followed by the traverser)
    REQUIRES = "requires"
    CONTAINS = "contains"

    # Advisory relationships
    SUGGESTS = "suggests"
    ALTERNATIVE = "alternative"
    CONFLICTS = "conflicts"

    # Usage found in code samples
    USES = "uses"

    # Mentioned without a trigger phrase
    RELATED = "related"


DEPENDENCY_TYPES: frozenset[RelationType] = frozenset(
    {RelationType.REQUIRES, RelationType.CONTAINS}
)

DEFAULT_GRAPH_TYPES: tuple[RelationType, ...] = (
    RelationType.REQUIRES,
    RelationType.SUGGESTS,
    RelationType.CONTAINS,
    RelationType.ALTERNATIVE,
)


@dataclass
class RelationshipEdge:
    """A directed, typed, weighted link between two entities."""

    source_id: int
    target_id: int
    type: RelationType
    weight: float

    @property
    def key(self) -> tuple[int, int, RelationType]:
        return (self.source_id, self.target_id, self.type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "target_id": self.target_id,
            "type": self.type.value,
            "weight": self.weight,
        }


def parse_relation_types(names: list[str] | tuple[str, ...] | None) -> list[RelationType]:
    """Validate a relationship-type filter given as strings.

    Raises InvalidArgument naming the offending values.
    """
    if names is None:
        return list(DEFAULT_GRAPH_TYPES)
    parsed: list[RelationType] = []
    invalid: list[str] = []
    for name in names:
        try:
            rel = RelationType(str(name).strip().lower())
        except ValueError:
            invalid.append(str(name))
            continue
        if rel not in parsed:
            parsed.append(rel)
    if invalid:
        raise InvalidArgument(
            f"Unknown relationship type(s): {', '.join(invalid)}",
            invalid=invalid,
            allowed=[r.value for r in RelationType],
        )
    if not parsed:
        raise InvalidArgument("Relationship type filter must not be empty")
    return parsed


# =============================================================================
# Graph (ephemeral, one assembler call)
# =============================================================================


@dataclass
class GraphNode:
    """An entity decorated with its tags and category."""

    entity: Entity
    tags: list[TagAssignment] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.entity.id

    @property
    def category(self) -> str | None:
        for t in self.tags:
            if t.tag_type == TagType.CATEGORY:
                return t.tag
        return None

    def tag_dicts(self) -> list[dict[str, str]]:
        return [{"tag": t.tag, "type": t.tag_type.value} for t in self.tags]


@dataclass
class GraphStatistics:
    nodes: int
    edges: int
    entities_considered: int
    relationship_types: list[str]
    truncated: bool = False
    connected_components: int = 0
    isolated_nodes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": self.nodes,
            "edges": self.edges,
            "entities_considered": self.entities_considered,
            "relationship_types": self.relationship_types,
            "truncated": self.truncated,
            "connected_components": self.connected_components,
            "isolated_nodes": self.isolated_nodes,
        }


@dataclass
class Graph:
    nodes: list[GraphNode]
    edges: list[RelationshipEdge]
    statistics: GraphStatistics
