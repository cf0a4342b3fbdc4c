"""D3Target -- force-directed layout nodes and links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from compgraph.core.models import Graph


@dataclass
class D3Target:
    """Serialize a graph to D3 force-layout shape.

    Implements the GraphTarget[dict] protocol.
    """

    default_group: str = "default"

    def serialize(self, graph: Graph) -> dict[str, Any]:
        return {
            "nodes": [
                {
                    "id": str(n.id),
                    "name": n.entity.canonical_name,
                    "group": n.category or self.default_group,
                    "complexity": n.entity.complexity.value,
                    "tags": n.tag_dicts(),
                }
                for n in graph.nodes
            ],
            "links": [
                {
                    "source": str(e.source_id),
                    "target": str(e.target_id),
                    "value": e.weight,
                    "type": e.type.value,
                }
                for e in graph.edges
            ],
        }
