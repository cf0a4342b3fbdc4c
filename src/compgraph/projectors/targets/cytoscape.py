"""CytoscapeTarget -- interactive-graph elements with a fixed style table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from compgraph.core.models import Graph

# Presentation hints per complexity and relationship type. A lookup table,
# not computed from the graph.
CYTOSCAPE_STYLE: list[dict[str, Any]] = [
    {
        "selector": "node",
        "style": {
            "label": "data(label)",
            "background-color": "#004494",
            "color": "#fff",
            "text-valign": "center",
            "text-halign": "center",
        },
    },
    {"selector": 'node[complexity="simple"]', "style": {"background-color": "#4CAF50"}},
    {"selector": 'node[complexity="complex"]', "style": {"background-color": "#f44336"}},
    {
        "selector": "edge",
        "style": {
            "width": "data(weight)",
            "line-color": "#ccc",
            "target-arrow-color": "#ccc",
            "target-arrow-shape": "triangle",
            "curve-style": "bezier",
        },
    },
    {
        "selector": 'edge[type="requires"]',
        "style": {"line-color": "#f44336", "target-arrow-color": "#f44336", "line-style": "solid"},
    },
    {
        "selector": 'edge[type="suggests"]',
        "style": {"line-color": "#2196F3", "target-arrow-color": "#2196F3", "line-style": "dashed"},
    },
    {
        "selector": 'edge[type="conflicts"]',
        "style": {"line-color": "#FF9800", "target-arrow-color": "#FF9800", "line-style": "dotted"},
    },
]


@dataclass
class CytoscapeTarget:
    """Serialize a graph to Cytoscape.js elements.

    Implements the GraphTarget[dict] protocol.
    """

    include_style: bool = True

    def serialize(self, graph: Graph) -> dict[str, Any]:
        nodes = [
            {
                "data": {
                    "id": str(n.id),
                    "label": n.entity.canonical_name,
                    "title": n.entity.display_title,
                    "category": n.category or "uncategorized",
                    "complexity": n.entity.complexity.value,
                    "requires_script": n.entity.requires_script,
                    "tags": n.tag_dicts(),
                }
            }
            for n in graph.nodes
        ]
        edges = [
            {
                "data": {
                    "id": f"e{idx}",
                    "source": str(e.source_id),
                    "target": str(e.target_id),
                    "type": e.type.value,
                    "weight": e.weight,
                }
            }
            for idx, e in enumerate(graph.edges)
        ]
        out: dict[str, Any] = {"elements": {"nodes": nodes, "edges": edges}}
        if self.include_style:
            out["style"] = CYTOSCAPE_STYLE
        return out
