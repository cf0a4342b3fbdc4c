"""Related-component lookup: outgoing and incoming edges for one entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.models import Entity, RelationshipEdge, RelationType
from compgraph.observability import get_logger, timed
from compgraph.resolve import EntityResolver
from compgraph.settings import CatalogSettings

from .extractor import RelationshipExtractor

# Display order for grouped relationships; anything else sorts last
_TYPE_ORDER = {
    RelationType.REQUIRES: 1,
    RelationType.SUGGESTS: 2,
    RelationType.CONTAINS: 3,
    RelationType.ALTERNATIVE: 4,
    RelationType.CONFLICTS: 5,
}


@dataclass
class RelatedEntry:
    entity: Entity
    edge: RelationshipEdge

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entity.id,
            "name": self.entity.canonical_name,
            "title": self.entity.display_title,
            "complexity": self.entity.complexity.value,
            "weight": self.edge.weight,
        }


@dataclass
class RelatedResult:
    component: Entity
    outgoing: dict[str, list[RelatedEntry]] = field(default_factory=dict)
    incoming: dict[str, list[RelatedEntry]] = field(default_factory=dict)
    entities_considered: int = 0
    edges_considered: int = 0

    @property
    def total_outgoing(self) -> int:
        return sum(len(v) for v in self.outgoing.values())

    @property
    def total_incoming(self) -> int:
        return sum(len(v) for v in self.incoming.values())

    @property
    def suggestions(self) -> list[str]:
        if self.total_outgoing or self.total_incoming:
            return []
        return [
            "No relationships found for this component.",
            "Try components with similar tags instead.",
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "component": self.component.to_dict(),
            "relationships": {
                "outgoing": {k: [e.to_dict() for e in v] for k, v in self.outgoing.items()},
                "incoming": {k: [e.to_dict() for e in v] for k, v in self.incoming.items()},
            },
            "total_outgoing": self.total_outgoing,
            "total_incoming": self.total_incoming,
            "entities_considered": self.entities_considered,
            "edges_considered": self.edges_considered,
            "suggestions": self.suggestions,
        }


def _group(entries: list[RelatedEntry]) -> dict[str, list[RelatedEntry]]:
    entries = sorted(
        entries,
        key=lambda r: (
            _TYPE_ORDER.get(r.edge.type, 6),
            r.edge.type.value,
            r.entity.display_title.lower(),
            r.entity.id,
        ),
    )
    grouped: dict[str, list[RelatedEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.edge.type.value, []).append(entry)
    return grouped


def find_related(
    snapshot: CatalogSnapshot,
    identifier: str | int,
    relation_type: RelationType | None = None,
    settings: CatalogSettings | None = None,
) -> RelatedResult:
    """Find what a component points at and what points at it.

    Raises NotFound if the identifier does not resolve.
    """
    sw = timed()
    component = EntityResolver(snapshot, settings).require(identifier)
    extractor = RelationshipExtractor(snapshot, settings)
    types = [relation_type] if relation_type else None

    outgoing = extractor.extract(component, types=types)
    incoming: list[RelationshipEdge] = []
    for other in snapshot:
        if other.id == component.id:
            continue
        incoming.extend(extractor.extract(other, candidates=[component], types=types))

    result = RelatedResult(
        component=component,
        outgoing=_group([RelatedEntry(snapshot.require(e.target_id), e) for e in outgoing]),
        incoming=_group([RelatedEntry(snapshot.require(e.source_id), e) for e in incoming]),
        entities_considered=len(snapshot),
        edges_considered=len(outgoing) + len(incoming),
    )
    get_logger(__name__).info(
        "related.found",
        component_id=component.id,
        outgoing=result.total_outgoing,
        incoming=result.total_incoming,
        latency_ms=sw.elapsed_ms(),
    )
    return result
