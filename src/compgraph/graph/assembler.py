"""Graph assembly: resolved entities + extracted edges → one Graph.

Resolves the requested identifiers (dropping misses), decorates each node
with its tags, mines edges between every pair in the node set, and merges
them in a networkx MultiDiGraph keyed by relationship type, so the same
(source, target, type) appears once with the highest weight seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import networkx as nx

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument, NotFound
from compgraph.core.models import (
    Entity,
    Graph,
    GraphNode,
    GraphStatistics,
    RelationshipEdge,
    RelationType,
    parse_relation_types,
)
from compgraph.observability import get_logger, timed
from compgraph.projectors import get_target
from compgraph.relationships import RelationshipExtractor
from compgraph.resolve import EntityResolver
from compgraph.settings import CatalogSettings, get_settings


def merge_edges(
    nodes: Iterable[GraphNode], edges: Iterable[RelationshipEdge]
) -> nx.MultiDiGraph:
    """Build a MultiDiGraph, one edge per (source, target, type).

    Duplicate keys keep the higher weight. Edges whose endpoints are not
    in the node set are dropped.
    """
    g = nx.MultiDiGraph()
    for node in nodes:
        g.add_node(node.id, node=node)
    for edge in edges:
        if edge.source_id not in g or edge.target_id not in g:
            continue
        if g.has_edge(edge.source_id, edge.target_id, key=edge.type):
            data = g.edges[edge.source_id, edge.target_id, edge.type]
            if edge.weight > data["weight"]:
                data["weight"] = edge.weight
        else:
            g.add_edge(edge.source_id, edge.target_id, key=edge.type, weight=edge.weight)
    return g


class GraphAssembler:
    """Builds relationship graphs over one catalog snapshot."""

    def __init__(
        self, snapshot: CatalogSnapshot, settings: CatalogSettings | None = None
    ) -> None:
        self._snapshot = snapshot
        self._settings = settings or get_settings()
        self._resolver = EntityResolver(snapshot, self._settings)
        self._extractor = RelationshipExtractor(snapshot, self._settings)

    def assemble(
        self,
        identifiers: Sequence[str | int] | None = None,
        relationship_types: Sequence[str | RelationType] | None = None,
    ) -> Graph:
        """Assemble the graph for identifiers (None or empty = whole catalog).

        Raises:
            InvalidArgument: relationship_types contains an unknown name.
            NotFound: none of the identifiers resolved.
        """
        sw = timed()
        types = parse_relation_types(
            None if relationship_types is None else [str(t) for t in relationship_types]
        )
        entities, truncated = self._select(identifiers)
        if not entities:
            raise NotFound(
                "No components found for graph",
                identifiers=list(identifiers or []),
            )

        nodes = [GraphNode(entity=e, tags=list(self._snapshot.tags_for(e.id))) for e in entities]
        raw_edges = self._extractor.extract_all(entities, candidates=entities, types=types)
        g = merge_edges(nodes, raw_edges)

        edges = [
            RelationshipEdge(source_id=s, target_id=t, type=RelationType(k), weight=data["weight"])
            for s, t, k, data in g.edges(keys=True, data=True)
        ]
        stats = GraphStatistics(
            nodes=len(nodes),
            edges=len(edges),
            entities_considered=len(self._snapshot),
            relationship_types=[t.value for t in types],
            truncated=truncated,
            connected_components=nx.number_weakly_connected_components(g),
            isolated_nodes=nx.number_of_isolates(g),
        )

        get_logger(__name__).info(
            "graph.assembled",
            nodes=stats.nodes,
            edges=stats.edges,
            truncated=truncated,
            latency_ms=sw.elapsed_ms(),
        )
        return Graph(nodes=nodes, edges=edges, statistics=stats)

    def build(
        self,
        identifiers: Sequence[str | int] | None = None,
        relationship_types: Sequence[str | RelationType] | None = None,
        output_format: str = "cytoscape",
    ) -> dict[str, Any]:
        """Assemble and serialize in one call.

        Returns {"graph": <format payload>, "statistics": {...}, "format": str}.
        """
        target = get_target(output_format)
        graph = self.assemble(identifiers, relationship_types)
        return {
            "format": output_format,
            "graph": target.serialize(graph),
            "statistics": graph.statistics.to_dict(),
        }

    def _select(self, identifiers: Sequence[str | int] | None) -> tuple[list[Entity], bool]:
        cap = self._settings.node_cap
        if not identifiers:
            entities = list(self._snapshot.entities)
            return entities[:cap], len(entities) > cap

        selected: dict[int, Entity] = {}
        for identifier in identifiers:
            try:
                result = self._resolver.resolve(identifier)
            except InvalidArgument:
                result = None
            if result is None or result.entity is None:
                get_logger(__name__).debug("graph.identifier_dropped", identifier=str(identifier))
                continue
            selected.setdefault(result.entity.id, result.entity)

        entities = list(selected.values())
        return entities[:cap], len(entities) > cap
