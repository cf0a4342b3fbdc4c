"""Dependency traversal: bounded, cycle-safe walk over requires/contains edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument
from compgraph.core.models import DEPENDENCY_TYPES, Entity, RelationshipEdge
from compgraph.observability import get_logger, timed
from compgraph.relationships import RelationshipExtractor
from compgraph.resolve import EntityResolver
from compgraph.settings import CatalogSettings, get_settings


@dataclass
class DependencyNode:
    entity: Entity
    depth: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entity.id,
            "name": self.entity.canonical_name,
            "title": self.entity.display_title,
            "complexity": self.entity.complexity.value,
            "depth": self.depth,
        }


@dataclass
class TraversalResult:
    root: Entity
    max_depth: int
    nodes: list[DependencyNode] = field(default_factory=list)
    edges: list[RelationshipEdge] = field(default_factory=list)
    entities_considered: int = 0

    @property
    def total_nodes(self) -> int:
        return len(self.nodes)

    @property
    def total_edges(self) -> int:
        return len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "max_depth": self.max_depth,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "entities_considered": self.entities_considered,
        }


class DependencyTraverser:
    """Depth-first walk from one entity along its dependency edges.

    The visited set is shared by the whole walk, so each entity appears
    once even in diamond or cyclic dependency shapes. Edges into an
    already-visited entity are still reported.
    """

    def __init__(
        self, snapshot: CatalogSnapshot, settings: CatalogSettings | None = None
    ) -> None:
        self._snapshot = snapshot
        self._settings = settings or get_settings()
        self._resolver = EntityResolver(snapshot, self._settings)
        self._extractor = RelationshipExtractor(snapshot, self._settings)

    def traverse(self, identifier: str | int, max_depth: int | None = None) -> TraversalResult:
        """Walk outward from identifier to at most max_depth hops.

        Raises:
            InvalidArgument: max_depth is negative.
            NotFound: identifier does not resolve.
        """
        sw = timed()
        depth_limit = self._settings.default_depth if max_depth is None else max_depth
        if depth_limit < 0:
            raise InvalidArgument("max_depth must be >= 0", max_depth=depth_limit)

        root = self._resolver.require(identifier)
        result = TraversalResult(
            root=root,
            max_depth=depth_limit,
            entities_considered=len(self._snapshot),
        )
        self._visit(root, 0, depth_limit, set(), result)

        get_logger(__name__).info(
            "dependencies.traversed",
            root_id=root.id,
            max_depth=depth_limit,
            nodes=result.total_nodes,
            edges=result.total_edges,
            latency_ms=sw.elapsed_ms(),
        )
        return result

    def _visit(
        self,
        entity: Entity,
        depth: int,
        max_depth: int,
        visited: set[int],
        result: TraversalResult,
    ) -> None:
        if entity.id in visited or depth > max_depth:
            return
        visited.add(entity.id)
        result.nodes.append(DependencyNode(entity=entity, depth=depth))

        if depth >= max_depth:
            return
        for edge in self._extractor.extract(entity, types=DEPENDENCY_TYPES):
            result.edges.append(edge)
            target = self._snapshot.get(edge.target_id)
            if target is not None:
                self._visit(target, depth + 1, max_depth, visited, result)
